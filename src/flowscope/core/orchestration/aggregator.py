"""
Aggregator: turns per-record entries into the organization-level narrative.

The narrative is generated from a compacted summary (counts and short excerpts), never from
the raw records, so its request stays small regardless of how many records were analyzed.
If that request fails, fallback text referencing only the record count is used; entries are
always kept.
"""

from __future__ import annotations
from collections import Counter
from flowscope.core.parser.parser import parse_response
from flowscope.core.prompt.builder import build_summary_prompt
from flowscope.domain.exceptions.exceptions import ProviderError
from flowscope.domain.result.analysis import AnalysisResult
from typing import TYPE_CHECKING, Any
import logging
import time

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.core.orchestration.context import RunContext
    from flowscope.domain.record.record import RecordSet
    from flowscope.domain.result.analysis import AnalysisEntry

logger = logging.getLogger(__name__)

# Element kinds counted across records for the summary
COMMON_ELEMENTS = ("recordUpdates", "recordCreates", "decisions", "actionCalls")


def fallback_narrative(record_count: int) -> dict[str, str]:
    return {
        "organization_overview": (
            f"This selection has {record_count} flows across various business processes. "
            "Detailed global analysis temporarily unavailable."
        ),
        "potential_risks": "Global risk analysis temporarily unavailable.",
        "organization_improvements": "Global improvement recommendations temporarily unavailable.",
    }


def _excerpt(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def build_summary(
    record_set: RecordSet, entries: Sequence[AnalysisEntry], excerpt_chars: int = 100
) -> dict[str, Any]:
    """
    Compact, size-bounded description of the analyzed set:
    counts by category, trigger type and element kind, plus an excerpt of each entry.
    """
    categories = Counter(record.category or "Unknown" for record in record_set.records)
    triggers = Counter(
        record.trigger_type for record in record_set.records if record.trigger_type
    )
    elements: Counter[str] = Counter()
    for record in record_set.records:
        kinds = set(record.element_kinds)
        elements.update(kind for kind in COMMON_ELEMENTS if kind in kinds)

    return {
        "metadata": {
            "totalRecords": record_set.count,
            "sourceAlias": record_set.source_alias,
            "categories": dict(categories),
        },
        "patterns": {
            "triggerTypes": dict(triggers),
            "commonElements": dict(elements),
        },
        "recordSummaries": [
            {
                "name": entry.record_name,
                "businessSummary": _excerpt(entry.business_description, excerpt_chars),
                "keyImprovements": _excerpt(entry.improvements, excerpt_chars),
            }
            for entry in entries
        ],
    }


class Aggregator:
    def __init__(self, ctx: RunContext):
        self.ctx = ctx

    async def aggregate(self, entries: Sequence[AnalysisEntry]) -> AnalysisResult:
        """
        One completion for the narrative. Never raises ProviderError.
        """
        record_set = self.ctx.record_set
        options = self.ctx.options
        summary = build_summary(record_set, entries, options.excerpt_chars)
        prompt = build_summary_prompt(summary)
        label = "organization summary"

        self.ctx.display.show_chunk_start(label, f"{record_set.count} records", options.verbosity)
        start_time = time.time()
        try:
            text = await self.ctx.client.complete(prompt, label=label)
        except ProviderError as e:
            logger.warning(f"Organization-level analysis failed, using fallback text: {e}")
            self.ctx.display.show_chunk_failed(
                label, f"{record_set.count} records", e.code.value, options.verbosity, error_obj=e
            )
            return AnalysisResult(
                **fallback_narrative(record_set.count), entries=list(entries)
            )

        self.ctx.display.show_chunk_complete(
            label, f"{record_set.count} records", time.time() - start_time, options.verbosity
        )
        parsed = parse_response(text, [])
        return AnalysisResult(
            organization_overview=parsed.organization_overview,
            potential_risks=parsed.potential_risks,
            organization_improvements=parsed.organization_improvements,
            entries=list(entries),
        )
