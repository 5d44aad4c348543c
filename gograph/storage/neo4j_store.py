"""Neo4j graph store backed by the async `neo4j` driver.

Every write is a Cypher `MERGE` on the node's natural key, so replaying an
import is safe and concurrent upserts of the same key from different pipeline
stages cannot produce duplicates (given the uniqueness constraints from
`gograph.storage.constraints`).

Labels, relationship types and property names cannot be passed as Cypher
parameters, so they are interpolated as backtick-quoted identifiers. All
values travel as parameters.
"""

import logging
from typing import Any, Mapping, Sequence

from neo4j import AsyncDriver, AsyncGraphDatabase

from goschema.graph import (
    SYNONYM_COLLECTION_LABEL,
    SYNONYM_LABEL,
    TERM_LABEL,
    GraphNode,
    NodeRef,
    key_property,
)
from goschema.storage import GraphStoreInterface
from gograph.config import Neo4jSettings

logger = logging.getLogger(__name__)


def quote_identifier(name: str) -> str:
    """Quote a label, relationship type or property name for Cypher."""
    if not name:
        raise ValueError("Cypher identifier must not be empty")
    return "`" + name.replace("`", "``") + "`"


def _node_pattern(variable: str, node: NodeRef, parameter: str) -> str:
    return f"({variable}:{quote_identifier(node.label)} {{{quote_identifier(key_property(node.label))}: ${parameter}}})"


class Neo4jGraphStore(GraphStoreInterface):
    """Graph store that writes to Neo4j.

    The driver maintains its own connection pool; each operation runs in a
    short-lived session, so one store can be shared by all pipeline stages.

    Example:
        ```python
        store = Neo4jGraphStore(Neo4jSettings(uri="bolt://localhost:7687"))
        await store.connect()
        try:
            await TermLoader(store=store).run_import("go.obo")
        finally:
            await store.close()
        ```
    """

    def __init__(self, settings: Neo4jSettings | None = None, driver: AsyncDriver | None = None) -> None:
        self.settings = settings or Neo4jSettings()
        self.driver: AsyncDriver | None = driver

    async def connect(self) -> None:
        """Establish the driver and verify the server is reachable."""
        if self.driver is None:
            self.driver = AsyncGraphDatabase.driver(
                self.settings.uri,
                auth=(self.settings.user, self.settings.password),
            )
            await self.driver.verify_connectivity()
            logger.info("Connected to Neo4j at %s", self.settings.uri)

    async def close(self) -> None:
        if self.driver is not None:
            await self.driver.close()
            self.driver = None
            logger.info("Closed Neo4j connection")

    def _session(self):
        if self.driver is None:
            raise RuntimeError("Neo4jGraphStore is not connected; call connect() first")
        return self.driver.session(database=self.settings.database)

    async def _execute_write(self, query: str, parameters: Mapping[str, Any] | None = None):
        async with self._session() as session:
            result = await session.run(query, dict(parameters or {}))
            return await result.single()

    async def _execute_read(self, query: str, parameters: Mapping[str, Any] | None = None) -> list[dict]:
        async with self._session() as session:
            result = await session.run(query, dict(parameters or {}))
            return await result.data()

    async def upsert_node(self, node: NodeRef, attributes: Mapping[str, Any] | None = None) -> str:
        query = f"MERGE {_node_pattern('n', node, 'key')}"
        if attributes:
            query += " SET n += $attributes"
        query += f" RETURN n.{quote_identifier(node.key_property)} AS key"
        record = await self._execute_write(query, {"key": node.key, "attributes": dict(attributes or {})})
        return record["key"] if record else node.key

    async def node_exists(self, node: NodeRef) -> bool:
        query = f"OPTIONAL MATCH {_node_pattern('n', node, 'key')} RETURN n IS NOT NULL AS exists"
        record = await self._execute_write(query, {"key": node.key})
        return bool(record and record["exists"])

    async def upsert_edge(
        self,
        edge_type: str,
        source: NodeRef,
        target: NodeRef,
        attributes: Mapping[str, Any] | None = None,
        overwrite: bool = True,
    ) -> bool:
        query = f"MATCH {_node_pattern('s', source, 'source')} MATCH {_node_pattern('t', target, 'target')} " f"MERGE (s)-[r:{quote_identifier(edge_type)}]->(t)"
        if attributes:
            query += " SET r += $attributes" if overwrite else " ON CREATE SET r += $attributes"
        query += " RETURN count(r) AS edges"
        record = await self._execute_write(
            query,
            {"source": source.key, "target": target.key, "attributes": dict(attributes or {})},
        )
        return bool(record and record["edges"])

    async def add_label(self, node: NodeRef, label: str) -> bool:
        query = f"MATCH {_node_pattern('n', node, 'key')} SET n:{quote_identifier(label)} RETURN count(n) AS nodes"
        record = await self._execute_write(query, {"key": node.key})
        return bool(record and record["nodes"])

    async def get_node(self, node: NodeRef) -> GraphNode | None:
        query = f"MATCH {_node_pattern('n', node, 'key')} RETURN properties(n) AS props, labels(n) AS labels"
        rows = await self._execute_read(query, {"key": node.key})
        if not rows:
            return None
        props = dict(rows[0]["props"])
        props.pop(node.key_property, None)
        labels = frozenset(rows[0]["labels"]) - {node.label}
        return GraphNode(label=node.label, key=node.key, attributes=props, labels=labels)

    async def count_nodes(self, label: str | None = None) -> int:
        pattern = f"(n:{quote_identifier(label)})" if label else "(n)"
        rows = await self._execute_read(f"MATCH {pattern} RETURN count(n) AS total")
        return rows[0]["total"] if rows else 0

    async def count_edges(self, edge_type: str | None = None) -> int:
        pattern = f"()-[r:{quote_identifier(edge_type)}]->()" if edge_type else "()-[r]->()"
        rows = await self._execute_read(f"MATCH {pattern} RETURN count(r) AS total")
        return rows[0]["total"] if rows else 0

    async def delete_term_graph(self) -> int:
        labels = (TERM_LABEL, SYNONYM_COLLECTION_LABEL, SYNONYM_LABEL)
        predicate = " OR ".join(f"n:{quote_identifier(label)}" for label in labels)
        record = await self._execute_write(f"MATCH (n) WHERE {predicate} DETACH DELETE n RETURN count(n) AS deleted")
        deleted = record["deleted"] if record else 0
        logger.info("Deleted %d GO term graph nodes", deleted)
        return deleted

    async def apply_schema(self, statements: Sequence[str]) -> None:
        for statement in statements:
            await self._execute_write(statement)
            logger.info("Constraint: %s has been defined", statement)
