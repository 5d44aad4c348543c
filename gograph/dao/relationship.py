"""Data access for typed edges between GoTerm nodes."""

import logging

from goschema.graph import NodeRef, relationship_edge_type
from goschema.storage import GraphStoreInterface
from goschema.term import Term, TermRelationship
from gograph.dao.term import GoTermDao
from gograph.errors import TermPersistenceError

logger = logging.getLogger(__name__)


class GoRelationshipDao:
    """Create the `is_a`, `intersection_of` and `relationship` edges of a term.

    A placeholder GoTerm node is created for the target of a relationship if
    that term has not been loaded yet. Edge attributes are written when the
    edge is first created and left untouched on replay.
    """

    def __init__(self, store: GraphStoreInterface, term_dao: GoTermDao | None = None) -> None:
        self.store = store
        self.term_dao = term_dao or GoTermDao(store)

    async def load_relationship(self, term_id: str, relationship: TermRelationship) -> bool:
        """Persist one relationship; returns False when it was skipped as malformed."""
        if not relationship.has_target:
            logger.warning(
                "GO term %s has a %s line without a target id; skipping it",
                term_id,
                relationship.relation_type,
            )
            return False
        if not await self.term_dao.term_node_exists(relationship.target_id):
            await self.term_dao.create_placeholder(relationship.target_id)
        created = await self.store.upsert_edge(
            relationship_edge_type(relationship.relation_type),
            NodeRef.term(term_id),
            NodeRef.term(relationship.target_id),
            {"qualifier": relationship.qualifier, "description": relationship.description},
            overwrite=False,
        )
        if not created:
            raise TermPersistenceError(
                term_id,
                f"unable to create {relationship.relation_type} edge to {relationship.target_id}",
            )
        return True

    async def load_relationships(self, term: Term) -> int:
        """Persist every relationship of the term; returns the number written."""
        loaded = 0
        for relationship in term.relationships:
            if await self.load_relationship(term.term_id, relationship):
                loaded += 1
        return loaded
