"""Segment an OBO file into per-term blocks of lines.

An OBO file is a header followed by stanzas. A `[Term]` stanza starts at the
marker line and runs to the first blank line (or end of input). Everything
outside a term stanza, including the header and `[Typedef]` stanzas, is
skipped.

The scanner is forward-only: every line is read from the source exactly once.
When `collect()` runs into the next block-start marker without an intervening
blank line it ends the current block there and remembers that it is already
positioned on a marker, so the following `advance()` does not skip the new
block.
"""

from typing import Iterator

from gograph.obo.source import OboLineSource

TERM_BLOCK_MARKER = "[Term]"


class TermBlock:
    """Mutable accumulator of the raw lines of one term stanza."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def add_line(self, line: str) -> None:
        self._lines.append(line)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def has_content(self) -> bool:
        return bool(self._lines)

    def __len__(self) -> int:
        return len(self._lines)


class TermBlockScanner:
    """Group the lines of an `OboLineSource` into `TermBlock`s.

    Example:
        ```python
        with OboLineSource("go.obo") as source:
            scanner = TermBlockScanner(source)
            for block in scanner.blocks():
                term = decode_term(block.lines)
        ```
    """

    def __init__(self, source: OboLineSource, block_marker: str = TERM_BLOCK_MARKER) -> None:
        self.source = source
        self.block_marker = block_marker
        self._at_marker = False
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _next_line(self) -> str | None:
        line = self.source.read_line()
        if line is None:
            self._exhausted = True
        return line

    def _is_marker(self, line: str) -> bool:
        return line.startswith(self.block_marker)

    def advance(self) -> bool:
        """Discard lines up to and including the next block-start marker.

        Returns:
            True if positioned at the start of a block, False at end of input.
        """
        if self._at_marker:
            self._at_marker = False
            return True
        while True:
            line = self._next_line()
            if line is None:
                return False
            if self._is_marker(line):
                return True

    def collect(self) -> TermBlock | None:
        """Accumulate lines into a block until a blank line, a marker or end of input.

        Call after a successful `advance()`. A block with no lines is returned
        for a marker with no body; None is returned only when input was
        already exhausted before the block began.
        """
        if self._exhausted:
            return None
        block = TermBlock()
        while True:
            line = self._next_line()
            if line is None or not line.strip():
                return block
            if self._is_marker(line):
                self._at_marker = True
                return block
            block.add_line(line)

    def next_block(self) -> TermBlock | None:
        """Advance to and collect the next block, or return None at end of input."""
        if not self.advance():
            return None
        return self.collect()

    def blocks(self) -> Iterator[TermBlock]:
        """Iterate over the blocks that have content, skipping empty ones."""
        while True:
            block = self.next_block()
            if block is None:
                return
            if block.has_content:
                yield block
