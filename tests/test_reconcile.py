from flowscope.core.parser.reconcile import reconcile
from flowscope.domain.record.record import Record
from flowscope.domain.result.analysis import AnalysisEntry
from tests.factories import RecordFactory


def entry(name: str, description: str = "desc", record_id: str | None = None) -> AnalysisEntry:
    return AnalysisEntry(
        record_name=name,
        business_description=description,
        improvements="imp",
        record_id=record_id,
    )


def test_one_entry_per_record_in_record_order():
    records = RecordFactory.create_batch(3)
    entries = [entry(records[2].name), entry(records[0].name), entry(records[1].name)]
    result = reconcile(entries, records)
    assert [e.record_name for e in result] == [r.name for r in records]
    assert [e.record_id for e in result] == [r.id for r in records]


def test_matched_entries_take_canonical_name():
    records = [Record(id="1", name="Order_Update_Flow")]
    result = reconcile([entry("order update flow")], records)
    assert result[0].record_name == "Order_Update_Flow"
    assert result[0].origin == "parsed"


def test_missing_record_gets_synthesized_entry():
    records = [Record(id="1", name="A"), Record(id="2", name="B", category="Workflow")]
    result = reconcile([entry("A", "foo")], records)
    assert result[0].business_description == "foo"
    assert result[1].origin == "synthesized"
    assert result[1].record_id == "2"
    assert "Workflow" in result[1].business_description


def test_unknown_entries_are_dropped():
    records = [Record(id="1", name="A")]
    result = reconcile([entry("Zebra"), entry("A")], records)
    assert len(result) == 1
    assert result[0].record_name == "A"
    assert result[0].origin == "parsed"


def test_stricter_match_wins_over_substring():
    records = [Record(id="1", name="Order"), Record(id="2", name="Order Update")]
    entries = [entry("Order Update", "long"), entry("Order", "short")]
    result = reconcile(entries, records)
    assert result[0].business_description == "short"
    assert result[1].business_description == "long"


def test_substring_match_after_exact_matches():
    records = [Record(id="1", name="Order"), Record(id="2", name="Order Update")]
    entries = [entry("Order Update Flow (v3)", "long"), entry("Order", "short")]
    result = reconcile(entries, records)
    assert [e.business_description for e in result] == ["short", "long"]


def test_record_id_beats_name():
    records = [Record(id="1", name="A"), Record(id="2", name="B")]
    entries = [entry("A", "belongs to B", record_id="2"), entry("A", "belongs to A")]
    result = reconcile(entries, records)
    assert result[0].business_description == "belongs to A"
    assert result[1].business_description == "belongs to B"
    assert result[1].record_name == "B"


def test_each_entry_is_claimed_once():
    records = [Record(id="1", name="A"), Record(id="2", name="a")]
    result = reconcile([entry("A")], records)
    assert result[0].origin == "parsed"
    assert result[1].origin == "synthesized"


def test_reconcile_is_idempotent():
    records = RecordFactory.create_batch(4)
    entries = [entry(records[1].name), entry("Unknown"), entry(records[3].name.upper())]
    once = reconcile(entries, records)
    assert reconcile(once, records) == once


def test_no_records_drops_everything():
    assert reconcile([entry("A")], []) == []
