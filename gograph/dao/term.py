"""Data access for GoTerm nodes."""

import logging

from goschema.graph import NodeRef
from goschema.storage import GraphStoreInterface
from goschema.term import Term

logger = logging.getLogger(__name__)


class GoTermDao:
    """Create, complete and tag GoTerm nodes.

    A GoTerm node may first appear as a placeholder, created when another
    term's relationship points at it. `load_term_node` merges on the same
    `go_id`, so the placeholder is completed in place.
    """

    def __init__(self, store: GraphStoreInterface) -> None:
        self.store = store

    async def load_term_node(self, term: Term) -> str:
        """Merge the term's node and set its name, definition and namespace."""
        node = NodeRef.term(term.term_id)
        key = await self.store.upsert_node(
            node,
            {
                "go_name": term.name,
                "go_definition": term.definition,
                "go_namespace": term.namespace,
            },
        )
        await self.add_namespace_label(term)
        return key

    async def add_namespace_label(self, term: Term) -> bool:
        """Tag the node with the term's namespace (e.g. `biological_process`) as a label."""
        if not term.namespace.strip():
            return False
        return await self.store.add_label(NodeRef.term(term.term_id), term.namespace.strip())

    async def create_placeholder(self, term_id: str) -> str:
        """Merge a key-only GoTerm so relationships can target a term not loaded yet."""
        logger.debug("Creating placeholder GoTerm %s", term_id)
        return await self.store.upsert_node(NodeRef.term(term_id))

    async def term_node_exists(self, term_id: str) -> bool:
        return await self.store.node_exists(NodeRef.term(term_id))
