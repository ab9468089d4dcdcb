"""
Chunk orchestrator: runs planned chunks one at a time against the run's client.

Per-chunk lifecycle:

    PENDING -> IN_FLIGHT -> SUCCEEDED
                         -> FAILED_ISOLATED

A ProviderError fails only its own chunk: every record in it gets an "unavailable"
placeholder and the run moves on. Overload retries happen inside the client, so a chunk that
reaches FAILED_ISOLATED has already exhausted them (or hit a non-retryable error).
After a successful chunk that is not the last, the orchestrator sleeps inter_chunk_delay.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from flowscope.core.parser.parser import parse_response
from flowscope.core.parser.reconcile import reconcile
from flowscope.core.prompt.builder import build_chunk_prompt
from flowscope.domain.exceptions.exceptions import ProviderError
from flowscope.domain.result.analysis import AnalysisEntry
from flowscope.domain.result.error import ErrorInfo
from flowscope.utils.progress.handlers import preview_names
from typing import TYPE_CHECKING
import asyncio
import logging
import time

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.core.batching.chunker import Chunk
    from flowscope.core.orchestration.context import RunContext

logger = logging.getLogger(__name__)


class ChunkState(Enum):
    PENDING = "pending"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED_ISOLATED = "failed_isolated"


@dataclass
class ChunkOutcome:
    chunk: Chunk
    state: ChunkState = ChunkState.PENDING
    entries: list[AnalysisEntry] = field(default_factory=list)
    error: ErrorInfo | None = None
    duration: float = 0.0

    @property
    def label(self) -> str:
        return f"chunk {self.chunk.index + 1}"

    def transition(self, state: ChunkState) -> None:
        allowed = {
            ChunkState.PENDING: {ChunkState.IN_FLIGHT},
            ChunkState.IN_FLIGHT: {ChunkState.SUCCEEDED, ChunkState.FAILED_ISOLATED},
        }
        if state not in allowed.get(self.state, set()):
            raise RuntimeError(f"Invalid chunk transition: {self.state.value} -> {state.value}")
        self.state = state


class ChunkOrchestrator:
    """
    Sequential, single-flight execution of chunks for one run.
    """

    def __init__(self, ctx: RunContext):
        self.ctx = ctx

    async def _run_chunk(self, outcome: ChunkOutcome, total: int) -> None:
        chunk = outcome.chunk
        options = self.ctx.options
        label = f"{outcome.label}/{total}"
        preview = preview_names(chunk.names)
        prompt = build_chunk_prompt(chunk, self.ctx.record_set, total)
        if options.debug_payload:
            logger.debug(f"{label} prompt:\n{prompt}")

        outcome.transition(ChunkState.IN_FLIGHT)
        self.ctx.display.show_chunk_start(label, preview, options.verbosity)
        start_time = time.time()
        try:
            text = await self.ctx.client.complete(prompt, label=label)
        except ProviderError as e:
            outcome.duration = time.time() - start_time
            outcome.error = ErrorInfo.from_exception(e)
            outcome.entries = [AnalysisEntry.unavailable(record) for record in chunk.records]
            outcome.transition(ChunkState.FAILED_ISOLATED)
            logger.warning(f"{label} failed after {e.attempts} attempt(s): {e}")
            self.ctx.display.show_chunk_failed(
                label, preview, e.code.value, options.verbosity, error_obj=outcome.error
            )
            return

        outcome.duration = time.time() - start_time
        if options.debug_payload:
            logger.debug(f"{label} response:\n{text}")
        parsed = parse_response(text, chunk.records)
        outcome.entries = reconcile(parsed.entries, chunk.records)
        outcome.transition(ChunkState.SUCCEEDED)
        self.ctx.display.show_chunk_complete(label, preview, outcome.duration, options.verbosity)

    async def run(self, chunks: Sequence[Chunk]) -> list[ChunkOutcome]:
        """
        Run every chunk in order. Never raises ProviderError; failures are isolated per chunk.
        Entries of every chunk are appended to the run context as they settle.
        """
        outcomes = [ChunkOutcome(chunk=chunk) for chunk in chunks]
        total = len(outcomes)
        for position, outcome in enumerate(outcomes):
            await self._run_chunk(outcome, total)
            self.ctx.entries.extend(outcome.entries)
            is_last = position == total - 1
            if outcome.state is ChunkState.SUCCEEDED and not is_last:
                delay = self.ctx.options.inter_chunk_delay
                if delay > 0:
                    logger.debug(f"Waiting {delay:.1f}s before next chunk.")
                    await asyncio.sleep(delay)

        failed = sum(1 for o in outcomes if o.state is ChunkState.FAILED_ISOLATED)
        logger.info(f"Processed {total} chunks ({failed} failed).")
        return outcomes
