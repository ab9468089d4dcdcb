from __future__ import annotations
from flowscope.core.orchestration.aggregator import fallback_narrative
from flowscope.core.parser.parser import parse_response
from flowscope.core.parser.reconcile import reconcile
from flowscope.core.prompt.builder import build_full_prompt
from flowscope.domain.exceptions.exceptions import ProviderError
from flowscope.domain.result.analysis import AnalysisEntry, AnalysisResult
from flowscope.strategies.analyze.strategy import AnalysisStrategy
from flowscope.utils.progress.handlers import preview_names
from typing import TYPE_CHECKING, override
import logging
import time

if TYPE_CHECKING:
    from flowscope.core.orchestration.context import RunContext

logger = logging.getLogger(__name__)


class OneShotAnalyzer(AnalysisStrategy):
    """
    Whole record set in one request: global sections and per-record analysis together.
    """

    name = "single-shot"

    @override
    async def __call__(self, ctx: RunContext) -> AnalysisResult:
        records = ctx.record_set.records
        options = ctx.options
        label = "full analysis"
        preview = preview_names(ctx.record_set.names)
        logger.info(f"Analyzing {len(records)} records in a single request.")

        prompt = build_full_prompt(ctx.record_set)
        if options.debug_payload:
            logger.debug(f"{label} prompt:\n{prompt}")

        ctx.display.show_run_start(self.name, len(records), 1, options.verbosity)
        ctx.display.show_chunk_start(label, preview, options.verbosity)
        start_time = time.time()
        try:
            text = await ctx.client.complete(prompt, label=label)
        except ProviderError as e:
            logger.warning(f"Single-shot analysis failed: {e}")
            ctx.display.show_chunk_failed(
                label, preview, e.code.value, options.verbosity, error_obj=e
            )
            entries = [AnalysisEntry.unavailable(record) for record in records]
            ctx.entries.extend(entries)
            return AnalysisResult(**fallback_narrative(len(records)), entries=entries)

        ctx.display.show_chunk_complete(label, preview, time.time() - start_time, options.verbosity)
        if options.debug_payload:
            logger.debug(f"{label} response:\n{text}")

        parsed = parse_response(text, records)
        entries = reconcile(parsed.entries, records)
        ctx.entries.extend(entries)
        return AnalysisResult(
            organization_overview=parsed.organization_overview,
            potential_risks=parsed.potential_risks,
            organization_improvements=parsed.organization_improvements,
            entries=entries,
        )
