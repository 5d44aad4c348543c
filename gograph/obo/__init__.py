"""Reading OBO files: line source, term block scanner, decoder and filters."""

from gograph.obo.decoder import TermDecoder, decode_term
from gograph.obo.filters import ObsolescenceFilter
from gograph.obo.reader import iter_terms
from gograph.obo.scanner import TERM_BLOCK_MARKER, TermBlock, TermBlockScanner
from gograph.obo.source import OboLineSource

__all__ = [
    "OboLineSource",
    "ObsolescenceFilter",
    "TERM_BLOCK_MARKER",
    "TermBlock",
    "TermBlockScanner",
    "TermDecoder",
    "decode_term",
    "iter_terms",
]
