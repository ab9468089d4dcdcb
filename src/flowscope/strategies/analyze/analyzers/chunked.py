from __future__ import annotations
from flowscope.core.batching.chunker import plan_chunks
from flowscope.core.orchestration.aggregator import Aggregator
from flowscope.core.orchestration.orchestrator import ChunkOrchestrator
from flowscope.core.parser.reconcile import reconcile
from flowscope.strategies.analyze.strategy import AnalysisStrategy
from typing import TYPE_CHECKING, override
import logging

if TYPE_CHECKING:
    from flowscope.core.orchestration.context import RunContext
    from flowscope.domain.result.analysis import AnalysisResult

logger = logging.getLogger(__name__)


class ChunkedAnalyzer(AnalysisStrategy):
    """
    Map-reduce over records:
    MAP: per-record analysis, one small chunk at a time.
    REDUCE: one organization-level request over a compacted summary of the entries.
    """

    name = "chunked"

    @override
    async def __call__(self, ctx: RunContext) -> AnalysisResult:
        records = ctx.record_set.records
        options = ctx.options

        chunks = plan_chunks(records, options.max_chunk_cost, options.max_chunk_records)
        logger.info(f"Processing {len(records)} records in {len(chunks)} chunks.")
        ctx.display.show_run_start(self.name, len(records), len(chunks) + 1, options.verbosity)

        # MAP
        await ChunkOrchestrator(ctx).run(chunks)

        # Chunks ran in cost order; restore input order
        entries = reconcile(ctx.entries, records)

        # REDUCE
        return await Aggregator(ctx).aggregate(entries)
