"""
Gene Ontology Graph Schema - Term Models and Store Interface

This package contains only Pydantic models and ABC interfaces with no
functional code. It defines:

- Term, synonym, relationship and cross-reference records
- Node labels, natural keys and edge types of the target graph
- The graph store gateway interface

These are used by gograph (parsing and loading) and by storage backends.
"""

from goschema.graph import (
    GraphEdge,
    GraphNode,
    NodeRef,
    NodeState,
)
from goschema.storage import GraphStoreInterface
from goschema.term import Synonym, SynonymType, Term, TermRelationship, Xref

__all__ = [
    "GraphEdge",
    "GraphNode",
    "GraphStoreInterface",
    "NodeRef",
    "NodeState",
    "Synonym",
    "SynonymType",
    "Term",
    "TermRelationship",
    "Xref",
]

__version__ = "0.1.0"
