"""Graph store implementations and schema bootstrap."""

from gograph.storage.constraints import CONSTRAINTS, define_constraints
from gograph.storage.memory import InMemoryGraphStore

__all__ = [
    "CONSTRAINTS",
    "InMemoryGraphStore",
    "Neo4jGraphStore",
    "define_constraints",
]


def __getattr__(name: str):
    """Lazy import so the neo4j driver is only loaded when the Neo4j backend is used."""
    if name == "Neo4jGraphStore":
        from gograph.storage.neo4j_store import Neo4jGraphStore

        return Neo4jGraphStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
