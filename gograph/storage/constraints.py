"""Uniqueness constraints for the GO graph.

These constraints should be defined before the database is loaded with any
data. They are what turns concurrent `MERGE`s on the same key into a single
node. The statement list is fixed at import time and never mutated.
"""

import logging

from goschema.graph import KEY_PROPERTIES
from goschema.storage import GraphStoreInterface

logger = logging.getLogger(__name__)


def _constraint(label: str, key: str) -> str:
    name = f"unique_{label.lower()}_{key}"
    return f"CREATE CONSTRAINT {name} IF NOT EXISTS FOR (n:{label}) REQUIRE n.{key} IS UNIQUE"


CONSTRAINTS: tuple[str, ...] = tuple(_constraint(label, key) for label, key in KEY_PROPERTIES.items())


async def define_constraints(store: GraphStoreInterface) -> None:
    """Apply every constraint to the store. Safe to repeat (`IF NOT EXISTS`)."""
    await store.apply_schema(CONSTRAINTS)
    logger.info("Defined %d GO graph constraints", len(CONSTRAINTS))
