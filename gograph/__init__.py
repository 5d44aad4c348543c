"""
GO Graph - Gene Ontology OBO Import into a Graph Database.

Parses the `[Term]` stanzas of an OBO file and persists each term, its
synonyms, cited publications and relationships with idempotent upserts.
Relationships may point at terms that have not been loaded yet; those
targets are created as placeholder nodes and completed when their own term
is processed.

This module uses lazy imports so that parsing can be used without loading
the pipeline or a database driver. For example:

    # This does NOT import the pipeline:
    from gograph.obo import decode_term

    # This does (when the symbol is accessed):
    from gograph import TermLoader
"""

from typing import TYPE_CHECKING

from goschema.term import Synonym, SynonymType, Term, TermRelationship, Xref
from gograph.obo import (
    ObsolescenceFilter,
    OboLineSource,
    TermBlock,
    TermBlockScanner,
    TermDecoder,
    decode_term,
    iter_terms,
)

if TYPE_CHECKING:
    from gograph.pipeline.loader import ImportResult, TermLoader

__all__ = [
    "ImportResult",
    "ObsolescenceFilter",
    "OboLineSource",
    "Synonym",
    "SynonymType",
    "Term",
    "TermBlock",
    "TermBlockScanner",
    "TermDecoder",
    "TermLoader",
    "TermRelationship",
    "Xref",
    "decode_term",
    "iter_terms",
]

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import for the pipeline."""
    if name in ("TermLoader", "ImportResult"):
        from gograph.pipeline.loader import ImportResult, TermLoader

        return {"TermLoader": TermLoader, "ImportResult": ImportResult}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
