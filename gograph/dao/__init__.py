"""Data access objects that express GO term persistence as graph store upserts."""

from gograph.dao.publication import GoPublicationDao
from gograph.dao.relationship import GoRelationshipDao
from gograph.dao.synonym import GoSynonymDao
from gograph.dao.term import GoTermDao

__all__ = [
    "GoPublicationDao",
    "GoRelationshipDao",
    "GoSynonymDao",
    "GoTermDao",
]
