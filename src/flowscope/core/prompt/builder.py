"""
Prompt builders. Each returns the rendered text for one completion.

Record prompts always state the exact record count, list the display names, embed the
serialized records verbatim and spell out the output grammar from grammar.py.
"""

from __future__ import annotations
from collections import Counter
from flowscope.core.batching.size import compact_json
from flowscope.core.prompt import grammar
from flowscope.core.prompt.prompt import Prompt
from flowscope.core.prompt.templates import (
    full_analysis_prompt,
    chunk_analysis_prompt,
    summary_analysis_prompt,
    followup_prompt,
    exploration_prompt,
)
from typing import TYPE_CHECKING, Any
import json

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.core.batching.chunker import Chunk
    from flowscope.domain.record.record import Record, RecordSet
    from flowscope.domain.result.analysis import AnalysisResult


def _grammar_variables() -> dict[str, str]:
    return {
        "overview_header": grammar.format_section(grammar.OVERVIEW_HEADER),
        "risks_header": grammar.format_section(grammar.RISKS_HEADER),
        "improvements_header": grammar.format_section(grammar.IMPROVEMENTS_HEADER),
        "individual_header": grammar.format_section(grammar.INDIVIDUAL_HEADER),
        "record_marker": grammar.RECORD_MARKER,
        "description_label": grammar.format_label(grammar.DESCRIPTION_LABEL),
        "improvements_label": grammar.format_label(grammar.IMPROVEMENTS_LABEL),
    }


def build_full_prompt(record_set: RecordSet) -> str:
    """
    Single-shot prompt: global sections plus per-record analysis for the whole set.
    """
    variables: dict[str, Any] = _grammar_variables()
    variables.update(
        {
            "record_count": record_set.count,
            "record_names": record_set.names,
            "data": compact_json(record_set.serialize()),
        }
    )
    return Prompt(full_analysis_prompt).render(variables)


def build_chunk_prompt(chunk: Chunk, record_set: RecordSet, total_chunks: int) -> str:
    """
    Per-record analysis only, for the records in one chunk.
    The chunk payload keeps the set's metadata so the model knows the source.
    """
    variables = {
        "record_marker": grammar.RECORD_MARKER,
        "description_label": grammar.format_label(grammar.DESCRIPTION_LABEL),
        "improvements_label": grammar.format_label(grammar.IMPROVEMENTS_LABEL),
        "record_count": len(chunk),
        "chunk_number": chunk.index + 1,
        "total_chunks": total_chunks,
        "record_names": chunk.names,
        "data": compact_json(record_set.subset(chunk.records).serialize()),
    }
    return Prompt(chunk_analysis_prompt).render(variables)


def build_summary_prompt(summary: dict[str, Any]) -> str:
    """
    Organization-level narrative from the compacted summary built by the aggregator.
    """
    variables = {
        "overview_header": grammar.format_section(grammar.OVERVIEW_HEADER),
        "risks_header": grammar.format_section(grammar.RISKS_HEADER),
        "improvements_header": grammar.format_section(grammar.IMPROVEMENTS_HEADER),
        "record_count": summary.get("metadata", {}).get("totalRecords", 0),
        "summary": compact_json(summary),
    }
    return Prompt(summary_analysis_prompt).render(variables)


def build_followup_prompt(
    record_set: RecordSet, previous_result: AnalysisResult, question: str
) -> str:
    """
    Follow-up question over a finished analysis. Sends a lightweight description of the
    set instead of the records themselves.
    """
    categories = Counter(record.category or "Unknown" for record in record_set.records)
    variables = {
        "question": question,
        "source_alias": record_set.source_alias,
        "record_count": record_set.metadata.total or record_set.count,
        "categories": json.dumps(dict(categories)),
        "record_names": record_set.names,
        "previous_result": previous_result.to_json(indent=2),
    }
    return Prompt(followup_prompt).render(variables)


def build_exploration_prompt(records: Sequence[Record] | RecordSet, message: str) -> str:
    """
    Direct question over the full record JSON.
    """
    if hasattr(records, "serialize"):
        data = records.serialize()
    else:
        data = [record.serialize() for record in records]
    variables = {
        "message": message,
        "data": json.dumps(data, indent=2, ensure_ascii=False, default=str),
    }
    return Prompt(exploration_prompt).render(variables)
