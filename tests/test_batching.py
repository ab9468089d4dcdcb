import json

import pytest

from flowscope.core.batching.chunker import Chunk, plan_chunks
from flowscope.core.batching.size import compact_json, estimate_cost
from tests.factories import RecordFactory, TrivialRecordFactory, make_record_set


# Size estimator
# ---

def test_cost_is_compact_json_length():
    value = {"a": [1, 2, {"b": "c"}]}
    assert estimate_cost(value) == len('{"a":[1,2,{"b":"c"}]}')


def test_cost_counts_characters_not_bytes():
    assert estimate_cost("héllo") == len('"héllo"')


def test_cost_is_deterministic():
    record = RecordFactory()
    assert estimate_cost(record) == estimate_cost(record)
    assert estimate_cost(record) == estimate_cost(record.serialize())


def test_cost_of_record_set_matches_embedded_payload():
    record_set = make_record_set(RecordFactory.create_batch(3))
    assert estimate_cost(record_set) == len(compact_json(record_set.serialize()))
    assert json.loads(compact_json(record_set))["records"][0]["name"] == record_set.records[0].name


def test_cost_handles_non_json_values():
    from datetime import date

    assert estimate_cost({"when": date(2024, 1, 2)}) == len('{"when":"2024-01-02"}')


# Chunk planner
# ---

def _padded(size: int):
    """Record whose serialized cost is roughly `size`."""
    return RecordFactory(metadata={"blob": "x" * size})


def test_every_chunk_has_at_most_two_records():
    records = RecordFactory.create_batch(9)
    chunks = plan_chunks(records)
    assert all(1 <= len(chunk) <= 2 for chunk in chunks)


def test_chunks_partition_the_input_exactly():
    records = [_padded(size) for size in (50, 4000, 300, 9000, 10, 7000, 2500)]
    chunks = plan_chunks(records, max_cost=12_000, max_records=2)
    ids = [record.id for chunk in chunks for record in chunk.records]
    assert sorted(ids) == sorted(record.id for record in records)
    assert len(ids) == len(set(ids))


def test_chunks_follow_ascending_cost():
    records = [_padded(size) for size in (900, 100, 500)]
    chunks = plan_chunks(records, max_cost=100_000, max_records=1)
    costs = [chunk.cost for chunk in chunks]
    assert costs == sorted(costs)


def test_sort_is_stable_for_equal_costs():
    records = TrivialRecordFactory.create_batch(4)
    # Same-length names and ids give identical costs
    records = [r for r in records if len(r.id) == len(records[0].id) and len(r.name) == len(records[0].name)]
    chunks = plan_chunks(records, max_records=1)
    assert [chunk.records[0].id for chunk in chunks] == [r.id for r in records]


def test_oversized_record_becomes_singleton_chunk():
    big = _padded(20_000)
    small = [_padded(10), _padded(20)]
    chunks = plan_chunks([big, *small], max_cost=12_000)
    big_chunks = [chunk for chunk in chunks if big in chunk.records]
    assert len(big_chunks) == 1
    assert big_chunks[0].records == (big,)
    assert big_chunks[0].cost > 12_000


def test_cost_budget_closes_chunk():
    records = [_padded(5000), _padded(5100)]
    chunks = plan_chunks(records, max_cost=8000, max_records=2)
    assert len(chunks) == 2


def test_chunk_indices_are_positions():
    chunks = plan_chunks(RecordFactory.create_batch(5))
    assert [chunk.index for chunk in chunks] == list(range(len(chunks)))


def test_empty_input_plans_no_chunks():
    assert plan_chunks([]) == []


def test_chunk_rejects_empty_records():
    with pytest.raises(ValueError):
        Chunk(records=(), cost=0, index=0)


def test_max_records_must_be_positive():
    with pytest.raises(ValueError):
        plan_chunks(RecordFactory.create_batch(2), max_records=0)
