"""Load gograph settings from TOML (e.g. gograph.toml) and the environment.

Config file is looked up in order:
  1. Path in GOGRAPH_CONFIG env var (if set)
  2. gograph.toml in the gograph package directory
  3. gograph.toml in the current working directory

The first existing file wins. If none is found, built-in defaults are used.
Neo4j connection values can then be overridden with NEO4J_URI, NEO4J_USER,
NEO4J_PASSWORD and NEO4J_DATABASE.

Example gograph.toml:

    [neo4j]
    uri = "bolt://localhost:7687"
    user = "neo4j"
    password = "secret"

    [loader]
    channel_capacity = 16
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "NEO4J_URI": "uri",
    "NEO4J_USER": "user",
    "NEO4J_PASSWORD": "password",
    "NEO4J_DATABASE": "database",
}


class Neo4jSettings(BaseModel, frozen=True):
    """Connection settings for the Neo4j graph store."""

    uri: str = "bolt://localhost:7687"
    user: str = "neo4j"
    password: str = "neo4j"
    database: str = "neo4j"


class LoaderSettings(BaseModel, frozen=True):
    """Parsing and pipeline settings."""

    block_marker: str = Field(default="[Term]", description="Line that starts a term stanza.")
    id_prefix: str = Field(default="GO:", description="Namespace prefix that locates term ids.")
    obsolete_marker: str = Field(default="obsolete", description="Case-insensitive definition marker.")
    channel_capacity: int = Field(
        default=8,
        ge=1,
        description="Bound of each queue between pipeline stages.",
    )


class GoGraphConfig(BaseModel, frozen=True):
    neo4j: Neo4jSettings = Field(default_factory=Neo4jSettings)
    loader: LoaderSettings = Field(default_factory=LoaderSettings)


def _default_config_paths() -> list[Path]:
    """Return paths to check for gograph.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get("GOGRAPH_CONFIG"):
        paths.append(Path(os.environ["GOGRAPH_CONFIG"]))
    paths.append(Path(__file__).resolve().parent / "gograph.toml")
    paths.append(Path.cwd() / "gograph.toml")
    return paths


def _read_toml(paths: list[Path]) -> dict[str, Any]:
    for path in paths:
        if path.is_file():
            with open(path, "rb") as f:
                data = tomllib.load(f)
            logger.debug("Loaded gograph config from %s", path)
            return data
    return {}


def load_config(path: str | Path | None = None) -> GoGraphConfig:
    """Build the configuration from a TOML file plus environment overrides.

    Args:
        path: Explicit config file. When given, the default lookup is skipped.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
        pydantic.ValidationError: If a setting has the wrong type.
    """
    data = _read_toml([Path(path)] if path is not None else _default_config_paths())
    neo4j_data = dict(data.get("neo4j") or {})
    for env_name, field_name in ENV_OVERRIDES.items():
        if os.environ.get(env_name):
            neo4j_data[field_name] = os.environ[env_name]
    return GoGraphConfig(
        neo4j=Neo4jSettings(**neo4j_data),
        loader=LoaderSettings(**(data.get("loader") or {})),
    )
