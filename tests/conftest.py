"""Test fixtures and helpers for the GO graph importer.

This module provides:
- Factories for `Term` records and OBO text blocks
- `FailingGraphStore`, an in-memory store that raises for chosen operations
  or terms, used to exercise per-term fault isolation
- `FakeNeo4jDriver`, a stand-in for the async Neo4j driver that records
  every Cypher statement and its parameters
- Pytest fixtures for stores, loaders and the sample OBO file
"""

import io
from pathlib import Path
from typing import Any, Mapping, Sequence

import pytest

from goschema.graph import NodeRef
from goschema.term import Synonym, SynonymType, Term, TermRelationship
from gograph.obo.source import OboLineSource
from gograph.pipeline.loader import TermLoader
from gograph.storage.memory import InMemoryGraphStore

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

MITOCHONDRION_BLOCK = [
    "id: GO:0000001",
    "name: mitochondrion inheritance",
    "namespace: biological_process",
    'def: "The distribution of mitochondria..." [GOC:mcc]',
]


def make_term(
    term_id: str = "GO:0000001",
    name: str = "mitochondrion inheritance",
    namespace: str = "biological_process",
    definition: str = "The distribution of mitochondria...",
    synonyms: Sequence[tuple[str, str]] = (),
    relationships: Sequence[tuple[str, str]] = (),
    publication_ids: Sequence[int] = (),
) -> Term:
    """Build a term; relationships are (relation_type, target_id) pairs."""
    return Term(
        term_id=term_id,
        name=name,
        namespace=namespace,
        definition=definition,
        synonyms=tuple(Synonym(text=text, synonym_type=SynonymType(kind)) for text, kind in synonyms),
        relationships=tuple(TermRelationship(relation_type=kind, target_id=target, description=f"parent of {term_id}") for kind, target in relationships),
        publication_ids=frozenset(publication_ids),
    )


def source_from_text(text: str) -> OboLineSource:
    return OboLineSource.from_handle(io.StringIO(text))


class FailingGraphStore(InMemoryGraphStore):
    """In-memory store that raises ConnectionError on chosen calls.

    Args:
        fail_operations: Operation names (`upsert_node`, `upsert_edge`,
            `add_label`, `node_exists`) that always fail.
        fail_keys: Node keys whose writes fail, whatever the operation.
    """

    def __init__(self, fail_operations: Sequence[str] = (), fail_keys: Sequence[str] = ()) -> None:
        super().__init__()
        self.fail_operations = set(fail_operations)
        self.fail_keys = set(fail_keys)

    def _check(self, operation: str, *nodes: NodeRef) -> None:
        if operation in self.fail_operations or any(node.key in self.fail_keys for node in nodes):
            raise ConnectionError(f"{operation} failed")

    async def upsert_node(self, node: NodeRef, attributes: Mapping[str, Any] | None = None) -> str:
        self._check("upsert_node", node)
        return await super().upsert_node(node, attributes)

    async def node_exists(self, node: NodeRef) -> bool:
        self._check("node_exists", node)
        return await super().node_exists(node)

    async def upsert_edge(self, edge_type, source, target, attributes=None, overwrite=True) -> bool:
        self._check("upsert_edge", source, target)
        return await super().upsert_edge(edge_type, source, target, attributes, overwrite)

    async def add_label(self, node: NodeRef, label: str) -> bool:
        self._check("add_label", node)
        return await super().add_label(node, label)


class FakeResult:
    def __init__(self, record: dict | None, rows: list[dict]) -> None:
        self._record = record
        self._rows = rows

    async def single(self) -> dict | None:
        return self._record

    async def data(self) -> list[dict]:
        return self._rows


class FakeSession:
    def __init__(self, driver: "FakeNeo4jDriver") -> None:
        self.driver = driver

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def run(self, query: str, parameters: dict | None = None) -> FakeResult:
        self.driver.queries.append((query, parameters or {}))
        return FakeResult(self.driver.record, self.driver.rows)


class FakeNeo4jDriver:
    """Records Cypher sent through sessions; every query returns `record` / `rows`."""

    def __init__(self, record: dict | None = None, rows: list[dict] | None = None) -> None:
        self.record = record
        self.rows = rows or []
        self.queries: list[tuple[str, dict]] = []
        self.databases: list[str | None] = []
        self.closed = False

    def session(self, database: str | None = None) -> FakeSession:
        self.databases.append(database)
        return FakeSession(self)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def store() -> InMemoryGraphStore:
    return InMemoryGraphStore()


@pytest.fixture
def loader(store: InMemoryGraphStore) -> TermLoader:
    return TermLoader(store=store)


@pytest.fixture
def sample_obo() -> Path:
    return DATA_DIR / "sample_go.obo"
