"""Data access for synonym collections and synonyms.

    GoTerm -[HAS_SYNONYM_COLLECTION]-> GoSynonymCollection -[HAS_SYNONYM]-> GoSynonym (n)

The collection is keyed by the term id and each synonym by the term id
followed by its 1-based position, so replaying the same synonym list merges
onto the same nodes and edges.
"""

import logging

from goschema.graph import HAS_SYNONYM, HAS_SYNONYM_COLLECTION, NodeRef
from goschema.storage import GraphStoreInterface
from goschema.term import Term
from gograph.errors import TermPersistenceError

logger = logging.getLogger(__name__)


class GoSynonymDao:
    def __init__(self, store: GraphStoreInterface) -> None:
        self.store = store

    async def persist_synonyms(self, term: Term) -> int:
        """Persist the term's synonym collection and synonyms.

        Returns:
            The number of synonyms written (0 when the term has none).

        Raises:
            TermPersistenceError: If the term node is missing from the store.
        """
        if not term.synonyms:
            logger.debug("GO term %s does not have synonyms", term.term_id)
            return 0
        term_node = NodeRef.term(term.term_id)
        collection = NodeRef.synonym_collection(term.term_id)
        await self.store.upsert_node(collection)
        if not await self.store.upsert_edge(HAS_SYNONYM_COLLECTION, term_node, collection):
            raise TermPersistenceError(term.term_id, "GO term is not in the database")

        for ordinal, synonym in enumerate(term.synonyms, start=1):
            node = NodeRef.synonym(term.term_id, ordinal)
            await self.store.upsert_node(node, {"text": synonym.text, "type": synonym.synonym_type.value})
            await self.store.upsert_edge(HAS_SYNONYM, collection, node)
        return len(term.synonyms)
