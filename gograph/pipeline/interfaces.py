"""Pipeline interface definitions for GO term persistence.

A term is persisted by a fixed sequence of stages:

1. **Node**: merge the GoTerm node (must precede anything that links to it)
2. **Synonyms**: merge the synonym collection and synonym nodes
3. **Publications**: merge PubMed placeholders and link them
4. **Relationships**: merge placeholder targets and the typed edges

Each stage is a `TermStage`. The loader runs the stages in order for one
term; in a channel pipeline every stage runs as its own task and terms flow
through them in FIFO order. A stage that raises drops the term from the
remaining stages without affecting other terms.
"""

from abc import ABC, abstractmethod

from goschema.term import Term


class TermStage(ABC):
    """One idempotent persistence step for a term."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short stage name used in logs and failure records."""

    @abstractmethod
    async def process(self, term: Term) -> int:
        """Persist this stage's part of the term.

        Must be safe to repeat for the same term: every write is an upsert
        keyed by natural ids.

        Returns:
            The number of items written (nodes, synonyms, publications or edges).

        Raises:
            Exception: Any store error; the caller logs it and skips the term's
                remaining stages.
        """
