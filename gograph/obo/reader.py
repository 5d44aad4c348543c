"""Iterate over the decoded terms of an OBO source."""

from typing import Iterator

from goschema.term import Term
from gograph.obo.decoder import DEFAULT_ID_PREFIX, TermDecoder
from gograph.obo.scanner import TERM_BLOCK_MARKER, TermBlockScanner
from gograph.obo.source import OboLineSource


def iter_terms(
    source: OboLineSource,
    block_marker: str = TERM_BLOCK_MARKER,
    id_prefix: str = DEFAULT_ID_PREFIX,
) -> Iterator[Term]:
    """Yield one `Term` per non-empty term block, valid or not, in file order.

    Validity and obsolescence are left to the caller so that skipped terms
    can be counted and logged where the decision is made.
    """
    scanner = TermBlockScanner(source, block_marker)
    decoder = TermDecoder(id_prefix)
    for block in scanner.blocks():
        yield decoder.decode(block.lines)
