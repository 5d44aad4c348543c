"""Graph store interface used by the ontology importer.

The importer never talks to a database directly. Every write goes through
`GraphStoreInterface`, whose operations are keyed by natural ids and must be
safe under repeated identical invocation (upsert, never insert). That is what
makes an import run re-runnable over the same or overlapping input and lets
several pipeline stages write concurrently without higher level locking.

Implementations:
    - `gograph.storage.memory.InMemoryGraphStore` for tests and development
    - `gograph.storage.neo4j_store.Neo4jGraphStore` for a Neo4j database

All interfaces are async-first to match the async Neo4j driver.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from goschema.graph import GraphNode, NodeRef


class GraphStoreInterface(ABC):
    """Abstract interface for node and edge upserts against a graph store."""

    @abstractmethod
    async def upsert_node(self, node: NodeRef, attributes: Mapping[str, Any] | None = None) -> str:
        """Create the node if absent, then merge `attributes` into it.

        Existing attributes that are not named in `attributes` are left alone,
        so an upsert with no attributes never erases data written by another
        writer (for example a placeholder later completed by its own term).

        Returns:
            The node's key.
        """

    @abstractmethod
    async def node_exists(self, node: NodeRef) -> bool:
        """Return True if a node with this label and key is stored."""

    @abstractmethod
    async def upsert_edge(
        self,
        edge_type: str,
        source: NodeRef,
        target: NodeRef,
        attributes: Mapping[str, Any] | None = None,
        overwrite: bool = True,
    ) -> bool:
        """Create the (source, edge_type, target) edge if absent.

        Both endpoints must already exist; nothing is created otherwise.
        When `overwrite` is False the attributes are written only when the
        edge is first created, and a replay leaves them untouched.

        Returns:
            True if the edge exists after the call, False if an endpoint was missing.
        """

    @abstractmethod
    async def add_label(self, node: NodeRef, label: str) -> bool:
        """Tag an existing node with a secondary label.

        Returns:
            True if the node was found.
        """

    @abstractmethod
    async def get_node(self, node: NodeRef) -> GraphNode | None:
        """Retrieve a node, or None if it is not stored."""

    @abstractmethod
    async def count_nodes(self, label: str | None = None) -> int:
        """Return the number of nodes, optionally restricted to one primary label."""

    @abstractmethod
    async def count_edges(self, edge_type: str | None = None) -> int:
        """Return the number of edges, optionally restricted to one edge type."""

    @abstractmethod
    async def delete_term_graph(self) -> int:
        """Delete term, synonym collection and synonym nodes with their edges.

        Publication nodes are kept because their bibliographic attributes are
        filled in by a separate enrichment job.

        Returns:
            The number of nodes deleted.
        """

    @abstractmethod
    async def apply_schema(self, statements: Sequence[str]) -> None:
        """Run schema statements (uniqueness constraints) before an import."""

    async def close(self) -> None:
        """Release any connection held by the store."""
