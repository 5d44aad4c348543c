"""In-memory graph store for testing, dry runs and development.

This module provides a dictionary-based implementation of
`GraphStoreInterface` that keeps every node and edge in memory. It is
suitable for:

- **Unit testing**: Fast, isolated tests without a running Neo4j server
- **Development**: Loading an ontology to inspect the resulting graph
- **Small ontologies**: Demos and examples

**Not recommended for production** due to:
- No persistence (data is lost when the process exits)
- Memory constraints (the whole graph must fit in RAM)

The store follows the same upsert-by-natural-key discipline as the Neo4j
backend, so idempotency and placeholder promotion can be verified against it.
"""

from typing import Any, Mapping, Sequence

from goschema.graph import (
    PUBLICATION_LABEL,
    GraphEdge,
    GraphNode,
    NodeRef,
)
from goschema.storage import GraphStoreInterface

EdgeKey = tuple[NodeRef, str, NodeRef]


class InMemoryGraphStore(GraphStoreInterface):
    """In-memory graph store keyed by (label, key) for nodes and triples for edges.

    Nodes are stored in a `dict[NodeRef, GraphNode]`; edges in a
    `dict[(source, edge_type, target), GraphEdge]`. Because the dictionary
    keys are the natural keys, a repeated upsert can only ever update an
    existing entry, never add a duplicate.

    Every call made during the session is appended to `calls` as
    `(operation, detail)` so tests can assert on store traffic.

    Example:
        ```python
        store = InMemoryGraphStore()
        await store.upsert_node(NodeRef.term("GO:0000001"), {"go_name": "x"})
        assert await store.node_exists(NodeRef.term("GO:0000001"))
        ```
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._nodes: dict[NodeRef, GraphNode] = {}
        self._edges: dict[EdgeKey, GraphEdge] = {}
        self.schema: list[str] = []
        self.calls: list[tuple[str, Any]] = []

    async def upsert_node(self, node: NodeRef, attributes: Mapping[str, Any] | None = None) -> str:
        """Creates the node if absent and merges `attributes` into it.

        Args:
            node: Label and natural key of the node.
            attributes: Properties to set; properties not named are kept.

        Returns:
            The node's key.
        """
        self.calls.append(("upsert_node", node))
        existing = self._nodes.get(node)
        if existing is None:
            self._nodes[node] = GraphNode(label=node.label, key=node.key, attributes=dict(attributes or {}))
        elif attributes:
            merged = {**existing.attributes, **attributes}
            self._nodes[node] = existing.model_copy(update={"attributes": merged})
        return node.key

    async def node_exists(self, node: NodeRef) -> bool:
        self.calls.append(("node_exists", node))
        return node in self._nodes

    async def upsert_edge(
        self,
        edge_type: str,
        source: NodeRef,
        target: NodeRef,
        attributes: Mapping[str, Any] | None = None,
        overwrite: bool = True,
    ) -> bool:
        """Creates the edge if both endpoints exist.

        Args:
            edge_type: Relationship type, e.g. `IS_A`.
            source: Start node.
            target: End node.
            attributes: Edge properties.
            overwrite: Merge `attributes` into an existing edge when True;
                leave an existing edge untouched when False.

        Returns:
            True if the edge exists after the call, False if an endpoint is missing.
        """
        self.calls.append(("upsert_edge", (source, edge_type, target)))
        if source not in self._nodes or target not in self._nodes:
            return False
        key = (source, edge_type, target)
        existing = self._edges.get(key)
        if existing is None:
            self._edges[key] = GraphEdge(
                edge_type=edge_type,
                source=source,
                target=target,
                attributes=dict(attributes or {}),
            )
        elif overwrite and attributes:
            merged = {**existing.attributes, **attributes}
            self._edges[key] = existing.model_copy(update={"attributes": merged})
        return True

    async def add_label(self, node: NodeRef, label: str) -> bool:
        self.calls.append(("add_label", (node, label)))
        existing = self._nodes.get(node)
        if existing is None:
            return False
        if label not in existing.labels:
            self._nodes[node] = existing.model_copy(update={"labels": existing.labels | {label}})
        return True

    async def get_node(self, node: NodeRef) -> GraphNode | None:
        return self._nodes.get(node)

    async def get_edge(self, edge_type: str, source: NodeRef, target: NodeRef) -> GraphEdge | None:
        """Retrieves a specific edge by its triple. This is an O(1) lookup."""
        return self._edges.get((source, edge_type, target))

    async def edges_from(self, source: NodeRef, edge_type: str | None = None) -> list[GraphEdge]:
        """Lists the outgoing edges of a node. This is an O(n) scan."""
        return [edge for (src, etype, _), edge in self._edges.items() if src == source and (edge_type is None or etype == edge_type)]

    async def count_nodes(self, label: str | None = None) -> int:
        if label is None:
            return len(self._nodes)
        return sum(1 for ref in self._nodes if ref.label == label)

    async def count_edges(self, edge_type: str | None = None) -> int:
        if edge_type is None:
            return len(self._edges)
        return sum(1 for (_, etype, _) in self._edges if etype == edge_type)

    async def delete_term_graph(self) -> int:
        """Deletes every non-publication node and each edge touching one."""
        doomed = {ref for ref in self._nodes if ref.label != PUBLICATION_LABEL}
        for ref in doomed:
            del self._nodes[ref]
        for key in [k for k in self._edges if k[0] in doomed or k[2] in doomed]:
            del self._edges[key]
        return len(doomed)

    async def apply_schema(self, statements: Sequence[str]) -> None:
        """Records schema statements; uniqueness is already implied by the dict keys."""
        self.schema.extend(statements)

    def nodes(self) -> list[GraphNode]:
        return list(self._nodes.values())

    def edges(self) -> list[GraphEdge]:
        return list(self._edges.values())
