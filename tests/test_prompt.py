import json

import pytest

from flowscope.core.batching.chunker import plan_chunks
from flowscope.core.batching.size import compact_json
from flowscope.core.orchestration.aggregator import build_summary
from flowscope.core.prompt import grammar
from flowscope.core.prompt.builder import (
    build_chunk_prompt,
    build_exploration_prompt,
    build_followup_prompt,
    build_full_prompt,
    build_summary_prompt,
)
from flowscope.core.prompt.prompt import Prompt
from flowscope.domain.result.analysis import AnalysisEntry, AnalysisResult
from tests.factories import RecordFactory, make_record_set
from tests.fixtures import names_in_prompt


# Prompt
# ---

def test_prompt_renders_variables():
    prompt = Prompt("Analyze {{ count }} flows: {{ names | join(', ') }}")
    assert prompt.input_schema == {"count", "names"}
    assert prompt.render({"count": 2, "names": ["A", "B"]}) == "Analyze 2 flows: A, B"


def test_prompt_rejects_missing_variables():
    with pytest.raises(ValueError, match="missing"):
        Prompt("{{ a }} {{ b }}").render({"a": 1})


def test_prompt_rejects_extra_variables():
    with pytest.raises(ValueError, match="not referenced"):
        Prompt("{{ a }}").render({"a": 1, "b": 2})


def test_prompt_from_file(tmp_path):
    path = tmp_path / "question.jinja2"
    path.write_text("Q: {{ question }}")
    assert Prompt.from_file(path).render({"question": "why"}) == "Q: why"


def test_prompt_from_file_rejects_other_suffixes(tmp_path):
    path = tmp_path / "question.txt"
    path.write_text("Q")
    with pytest.raises(ValueError):
        Prompt.from_file(path)


# Builders
# ---

def test_full_prompt_states_grammar_count_and_names():
    record_set = make_record_set(RecordFactory.create_batch(3))
    prompt = build_full_prompt(record_set)

    for header in (
        grammar.OVERVIEW_HEADER,
        grammar.RISKS_HEADER,
        grammar.IMPROVEMENTS_HEADER,
        grammar.INDIVIDUAL_HEADER,
    ):
        assert grammar.format_section(header) in prompt
    assert grammar.format_label(grammar.DESCRIPTION_LABEL) in prompt
    assert "MUST analyze all 3 flows" in prompt
    assert names_in_prompt(prompt) == record_set.names
    assert compact_json(record_set.serialize()) in prompt


def test_chunk_prompt_embeds_only_its_records():
    record_set = make_record_set(RecordFactory.create_batch(4))
    chunks = plan_chunks(record_set.records)
    prompt = build_chunk_prompt(chunks[1], record_set, len(chunks))

    assert "batch 2 of 2" in prompt
    assert names_in_prompt(prompt) == chunks[1].names
    payload = json.loads(prompt.split("Flow data:\n", 1)[1])
    assert [r["id"] for r in payload["records"]] == [r.id for r in chunks[1].records]
    assert payload["metadata"]["source_alias"] == "acme-prod"
    assert grammar.format_section(grammar.OVERVIEW_HEADER) not in prompt


def test_summary_prompt_carries_compact_summary():
    record_set = make_record_set(RecordFactory.create_batch(2))
    entries = [AnalysisEntry.synthesized(r) for r in record_set.records]
    summary = build_summary(record_set, entries)
    prompt = build_summary_prompt(summary)

    assert "all 2 flows" in prompt
    assert compact_json(summary) in prompt
    assert grammar.format_section(grammar.INDIVIDUAL_HEADER) not in prompt


def test_followup_prompt_uses_declared_total():
    record_set = make_record_set(RecordFactory.create_batch(2))
    record_set = record_set.model_copy(
        update={"metadata": record_set.metadata.model_copy(update={"total": 40})}
    )
    prompt = build_followup_prompt(record_set, AnalysisResult(), "Why?")
    assert "Total flows: 40" in prompt
    assert "Question: Why?" in prompt


def test_exploration_prompt_accepts_record_set():
    record_set = make_record_set(RecordFactory.create_batch(1))
    prompt = build_exploration_prompt(record_set, "Explain")
    assert "User question: Explain" in prompt
    assert record_set.records[0].id in prompt
