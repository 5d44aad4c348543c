"""Sequential line reader over an OBO file."""

from pathlib import Path
from typing import IO


class OboLineSource:
    """Yield the lines of a text file one at a time, newline stripped.

    `read_line()` returns None once input is exhausted. Closing the source
    makes every later read report end of input, which is how a running import
    is cancelled: the scanner sees end of input and the pipeline drains.

    The file is opened in the constructor, so a missing or unreadable file is
    reported to the caller before any pipeline work starts.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self._handle: IO[str] | None = open(self.path, "r", encoding=encoding)
        self.lines_read = 0

    @classmethod
    def from_handle(cls, handle: IO[str], name: str = "<stream>") -> "OboLineSource":
        """Wrap an already open text stream (used by tests and stdin)."""
        source = cls.__new__(cls)
        source.path = Path(name)
        source._handle = handle
        source.lines_read = 0
        return source

    @property
    def closed(self) -> bool:
        return self._handle is None

    def read_line(self) -> str | None:
        if self._handle is None:
            return None
        line = self._handle.readline()
        if line == "":
            self.close()
            return None
        self.lines_read += 1
        return line.rstrip("\r\n")

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "OboLineSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
