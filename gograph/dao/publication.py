"""Data access for Publication placeholder nodes.

Publication nodes are created here with only their PubMed id and linked to
one or more GoTerm nodes. Their remaining attributes (title, DOI, ...) are
filled in later by a separate PubMed enrichment job, which keeps NCBI's
request rate limit out of the ontology import. Merging with no attributes
means a re-import never erases what that job has written.
"""

import logging

from goschema.graph import HAS_PUBLICATION, PUBMED_LABEL, NodeRef
from goschema.storage import GraphStoreInterface
from goschema.term import Term
from gograph.errors import TermPersistenceError

logger = logging.getLogger(__name__)


class GoPublicationDao:
    def __init__(self, store: GraphStoreInterface) -> None:
        self.store = store

    async def load_publication(self, term_id: str, pubmed_id: int) -> None:
        """Merge the placeholder for `pubmed_id` and link the term to it.

        Publication ids are shared across terms, so the placeholder may
        already exist; the merge then only adds the link.
        """
        publication = NodeRef.publication(pubmed_id)
        await self.store.upsert_node(publication)
        await self.store.add_label(publication, PUBMED_LABEL)
        if not await self.store.upsert_edge(HAS_PUBLICATION, NodeRef.term(term_id), publication):
            raise TermPersistenceError(
                term_id,
                f"unable to establish a relationship to PubMed id {pubmed_id}",
            )

    async def load_publications(self, term: Term) -> int:
        """Link every publication cited by the term, in ascending id order."""
        for pubmed_id in sorted(term.publication_ids):
            await self.load_publication(term.term_id, pubmed_id)
        return len(term.publication_ids)
