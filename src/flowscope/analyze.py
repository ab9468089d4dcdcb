"""
Public entry points.

    result = await analyze(records, provider="claude", credential=key)

run_analysis() works on an explicit RunContext, which callers keep when they want to ask
follow-up questions afterwards (see core/chat/followup.py).
Only input validation and client construction errors abort a run; provider failures
during the run end up as placeholder entries and fallback narrative text.
"""

from __future__ import annotations
from collections.abc import Sequence
from flowscope.core.orchestration.context import RunContext
from flowscope.domain.exceptions.exceptions import RecordSetError
from flowscope.domain.record.record import Record, RecordSet
from flowscope.strategies.analyze.selector import get_analyzer, select_strategy
from flowscope.utils.concurrency.warn import _warn_if_loop_exists
from typing import TYPE_CHECKING, Any
import asyncio
import logging
import time

if TYPE_CHECKING:
    from flowscope.core.clients.provider import ProviderId
    from flowscope.domain.config.analysis_options import AnalysisOptions
    from flowscope.domain.result.analysis import AnalysisResult

logger = logging.getLogger(__name__)

RecordsInput = RecordSet | dict[str, Any] | Sequence[Record | dict[str, Any]]


def to_record_set(records: RecordsInput) -> RecordSet:
    """
    Accept a RecordSet, a raw payload ({"metadata": ..., "flows": [...]}) or a list of
    records / raw record dicts. Duplicate ids and malformed records raise pydantic's
    ValidationError.
    """
    if isinstance(records, RecordSet):
        return records
    if isinstance(records, dict):
        return RecordSet.model_validate(records)
    return RecordSet(
        records=[r if isinstance(r, Record) else Record.model_validate(r) for r in records]
    )


async def run_analysis(ctx: RunContext) -> AnalysisResult:
    """
    Select a strategy for the context's record set and run it.
    The result is also stored on the context.
    """
    record_set = ctx.record_set
    if record_set.count == 0:
        raise RecordSetError("Cannot analyze an empty record set.")

    start_time = time.time()
    analyzer = get_analyzer(select_strategy(record_set, ctx.options))
    result = await analyzer(ctx)
    ctx.result = result

    placeholders = sum(1 for entry in result.entries if entry.is_placeholder)
    duration = time.time() - start_time
    logger.info(
        f"Analysis of {record_set.count} records finished in {duration:.2f}s "
        f"({placeholders} placeholder entries)."
    )
    ctx.display.show_run_complete(
        record_set.count, placeholders, duration, ctx.options.verbosity
    )
    return result


async def analyze(
    records: RecordsInput,
    provider: ProviderId | str | None = None,
    credential: str | None = None,
    options: AnalysisOptions | None = None,
) -> AnalysisResult:
    record_set = to_record_set(records)
    if record_set.count == 0:
        raise RecordSetError("Cannot analyze an empty record set.")
    ctx = RunContext.create(record_set, provider, credential, options)
    return await run_analysis(ctx)


def analyze_sync(
    records: RecordsInput,
    provider: ProviderId | str | None = None,
    credential: str | None = None,
    options: AnalysisOptions | None = None,
) -> AnalysisResult:
    """
    Blocking wrapper around analyze(). Do not call from inside a running event loop.
    """
    _warn_if_loop_exists()
    return asyncio.run(analyze(records, provider, credential, options))
