"""Exceptions raised by the GO graph importer."""

from typing import Any


class TermPersistenceError(RuntimeError):
    """A graph write for one term could not be completed."""

    def __init__(self, term_id: str, message: str) -> None:
        super().__init__(f"{term_id}: {message}")
        self.term_id = term_id


class GraphStoreUnavailableError(ConnectionError):
    """Every persistence attempt of an import run failed.

    Raised after the pipeline has drained; `result` holds the run's
    `ImportResult` with the per-term failures.
    """

    def __init__(self, message: str, result: Any = None) -> None:
        super().__init__(message)
        self.result = result
