"""Load GO terms from an OBO file into a graph store.

This module provides the `TermLoader` class, which coordinates the complete
import of an ontology file. The import runs as a staged pipeline:

    scan + decode -> obsolescence filter -> node -> synonyms -> publications
    -> relationships -> collector

Each arrow is a bounded `Channel` and each stage is its own asyncio task, so
a term can be persisted while the next ones are still being parsed. Terms
keep file order through every stage.

**Fault isolation** is per term: when a stage raises for a term, the error
is logged and recorded with the term id and stage name, that term skips its
remaining stages, and every other term proceeds. Nothing is retried.

**Fatal conditions** are surfaced only after in-flight terms have drained:
    - the input cannot be opened (raised before the pipeline starts) or read
    - every persistence attempt failed (`GraphStoreUnavailableError`)

Example usage:
    ```python
    loader = TermLoader(store=InMemoryGraphStore())
    result = await loader.run_import("data/go-basic.obo")
    print(f"Loaded {result.terms_loaded} GO terms")
    ```
"""

import asyncio
import logging
import time
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from goschema.storage import GraphStoreInterface
from goschema.term import Term
from gograph.config import LoaderSettings
from gograph.errors import GraphStoreUnavailableError
from gograph.obo.filters import ObsolescenceFilter
from gograph.obo.reader import iter_terms
from gograph.obo.source import OboLineSource
from gograph.pipeline.channels import Channel
from gograph.pipeline.interfaces import TermStage
from gograph.pipeline.stages import default_stages

logger = logging.getLogger(__name__)


class TermFailure(BaseModel, frozen=True):
    """A persistence error for one term at one stage."""

    term_id: str
    stage: str
    error: str


class TermLoadResult(BaseModel, frozen=True):
    """Result of persisting a single term with `TermLoader.load_term`.

    Attributes:
        term_id: Identifier of the term.
        loaded: True if every stage completed.
        skipped: Why the term never reached persistence ("invalid" or
            "obsolete"), or None.
        counts: Items written per stage name.
        failure: The stage failure that stopped the term, if any.
    """

    term_id: str
    loaded: bool
    skipped: str | None = None
    counts: dict[str, int] = Field(default_factory=dict)
    failure: TermFailure | None = None


class ImportResult(BaseModel, frozen=True):
    """Result of importing one OBO file.

    Attributes:
        source: Path of the imported file.
        terms_parsed: Non-empty term blocks decoded.
        terms_invalid: Terms skipped for a blank id, name or namespace.
        terms_obsolete: Terms dropped by the obsolescence filter.
        terms_loaded: Terms that completed every persistence stage.
        failures: Per-term persistence failures.
        elapsed_seconds: Wall-clock duration of the run.
    """

    source: str
    terms_parsed: int = 0
    terms_invalid: int = 0
    terms_obsolete: int = 0
    terms_loaded: int = 0
    failures: tuple[TermFailure, ...] = ()
    elapsed_seconds: float = 0.0

    @property
    def terms_failed(self) -> int:
        return len(self.failures)


class _RunState:
    """Mutable counters shared by the tasks of one import run."""

    def __init__(self) -> None:
        self.terms_parsed = 0
        self.terms_invalid = 0
        self.terms_loaded = 0
        self.stages_completed = 0
        self.failures: list[TermFailure] = []
        self.source_error: BaseException | None = None


class TermLoader(BaseModel):
    """Persists GO terms into a graph store through idempotent stages.

    Attributes:
        store: Graph store gateway every stage writes through.
        settings: Parsing and channel settings.
        stages: Persistence stages in execution order; defaults to node,
            synonyms, publications, relationships.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    store: GraphStoreInterface
    settings: LoaderSettings = Field(default_factory=LoaderSettings)
    stages: list[TermStage] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        if not self.stages:
            self.stages = default_stages(self.store)

    async def _apply_stage(self, stage: TermStage, term: Term) -> tuple[int, TermFailure | None]:
        try:
            return await stage.process(term), None
        except Exception as e:
            logger.error("Failed to persist GO term %s at stage %s: %s", term.term_id, stage.name, e)
            return 0, TermFailure(term_id=term.term_id, stage=stage.name, error=str(e) or type(e).__name__)

    async def load_term(self, term: Term) -> TermLoadResult:
        """Persist one term through every stage, in order.

        Invalid and obsolete terms are skipped without touching the store. A
        failing stage stops the term; the failure is returned, not raised.
        """
        if not term.is_valid():
            logger.warning("Skipping invalid GO term %r", term.term_id)
            return TermLoadResult(term_id=term.term_id, loaded=False, skipped="invalid")
        if not ObsolescenceFilter(self.settings.obsolete_marker).passes(term):
            return TermLoadResult(term_id=term.term_id, loaded=False, skipped="obsolete")

        counts: dict[str, int] = {}
        for stage in self.stages:
            count, failure = await self._apply_stage(stage, term)
            if failure is not None:
                return TermLoadResult(term_id=term.term_id, loaded=False, counts=counts, failure=failure)
            counts[stage.name] = count
        return TermLoadResult(term_id=term.term_id, loaded=True, counts=counts)

    async def _scan_terms(self, source: OboLineSource, outbox: Channel[Term], state: _RunState) -> None:
        try:
            for term in iter_terms(source, self.settings.block_marker, self.settings.id_prefix):
                state.terms_parsed += 1
                if not term.is_valid():
                    state.terms_invalid += 1
                    logger.warning("Skipping invalid GO term block %r (id, name and namespace are required)", term.term_id)
                    continue
                await outbox.send(term)
                # Block reads are synchronous; yield once per term so the stages interleave with scanning
                await asyncio.sleep(0)
        except Exception as e:
            logger.error("Reading %s failed after %d lines: %s", source.path, source.lines_read, e)
            state.source_error = e
        finally:
            source.close()
            await outbox.close()

    async def _filter_terms(self, inbox: Channel[Term], outbox: Channel[Term], obsolescence: ObsolescenceFilter) -> None:
        try:
            async for term in inbox:
                if obsolescence.passes(term):
                    await outbox.send(term)
        finally:
            await outbox.close()

    async def _run_stage(self, stage: TermStage, inbox: Channel[Term], outbox: Channel[Term], state: _RunState) -> None:
        try:
            async for term in inbox:
                _, failure = await self._apply_stage(stage, term)
                if failure is not None:
                    state.failures.append(failure)
                    continue
                state.stages_completed += 1
                await outbox.send(term)
        finally:
            await outbox.close()

    async def _collect(self, inbox: Channel[Term], state: _RunState) -> None:
        async for term in inbox:
            state.terms_loaded += 1
            logger.debug("GO term %s has been loaded", term.term_id)

    async def run_import(self, file_path: str | Path, source: OboLineSource | None = None) -> ImportResult:
        """Import every term of an OBO file.

        Args:
            file_path: The OBO file to read.
            source: An already open line source to read instead of opening
                `file_path`. Closing it cancels the run: the pipeline drains
                the terms already read and returns.

        Returns:
            An `ImportResult` with per-run counts and per-term failures.

        Raises:
            OSError: If the file cannot be opened or read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            GraphStoreUnavailableError: If terms reached persistence and not a single
                stage completed for any of them.
        """
        started = time.perf_counter()
        source = source or OboLineSource(file_path)
        state = _RunState()
        obsolescence = ObsolescenceFilter(self.settings.obsolete_marker)
        capacity = self.settings.channel_capacity

        decoded: Channel[Term] = Channel(capacity, "decoded")
        current: Channel[Term] = Channel(capacity, "filtered")
        tasks = [
            self._scan_terms(source, decoded, state),
            self._filter_terms(decoded, current, obsolescence),
        ]
        for stage in self.stages:
            outbox: Channel[Term] = Channel(capacity, stage.name)
            tasks.append(self._run_stage(stage, current, outbox, state))
            current = outbox
        tasks.append(self._collect(current, state))
        await asyncio.gather(*tasks)

        result = ImportResult(
            source=str(file_path),
            terms_parsed=state.terms_parsed,
            terms_invalid=state.terms_invalid,
            terms_obsolete=obsolescence.dropped,
            terms_loaded=state.terms_loaded,
            failures=tuple(state.failures),
            elapsed_seconds=time.perf_counter() - started,
        )
        logger.info(
            "Loaded %d GO terms from %s in %.2f seconds (%d obsolete, %d invalid, %d failed)",
            result.terms_loaded,
            result.source,
            result.elapsed_seconds,
            result.terms_obsolete,
            result.terms_invalid,
            result.terms_failed,
        )
        if state.source_error is not None:
            raise state.source_error
        if result.failures and state.stages_completed == 0:
            raise GraphStoreUnavailableError(
                f"All {result.terms_failed} GO terms that reached the graph store failed without completing a stage",
                result=result,
            )
        return result
