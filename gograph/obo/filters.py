"""Drop obsolete terms before they reach persistence."""

import logging

from goschema.term import OBSOLETE_MARKER, Term

logger = logging.getLogger(__name__)


class ObsolescenceFilter:
    """Pass a term only if its definition does not mention the obsolescence marker.

    The comparison is case-insensitive: "OBSOLETE.", "Obsolete" and
    "obsolete" all exclude the term.
    """

    def __init__(self, marker: str = OBSOLETE_MARKER) -> None:
        self.marker = marker
        self.dropped = 0

    def passes(self, term: Term) -> bool:
        if term.is_obsolete(self.marker):
            self.dropped += 1
            logger.info("GO term %s is marked as obsolete and will not be loaded", term.term_id)
            return False
        return True
