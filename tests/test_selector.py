from flowscope.core.batching.size import estimate_cost
from flowscope.domain.config.analysis_options import AnalysisOptions
from flowscope.strategies.analyze.analyzers.chunked import ChunkedAnalyzer
from flowscope.strategies.analyze.analyzers.one_shot import OneShotAnalyzer
from flowscope.strategies.analyze.selector import StrategyKind, get_analyzer, select_strategy
from tests.factories import RecordFactory, TrivialRecordFactory, make_record_set


def test_many_small_records_are_chunked():
    record_set = make_record_set(TrivialRecordFactory.create_batch(20))
    assert estimate_cost(record_set) < 100_000
    assert select_strategy(record_set) == StrategyKind.CHUNKED


def test_few_small_records_are_single_shot():
    record_set = make_record_set(RecordFactory.create_batch(3))
    assert select_strategy(record_set) == StrategyKind.SINGLE_SHOT


def test_large_payload_is_chunked_regardless_of_count():
    record = RecordFactory(metadata={"blob": "x" * 100_001})
    record_set = make_record_set([record])
    assert select_strategy(record_set) == StrategyKind.CHUNKED


def test_count_threshold_is_exclusive():
    options = AnalysisOptions(count_threshold=5)
    assert select_strategy(make_record_set(TrivialRecordFactory.create_batch(5)), options) == (
        StrategyKind.SINGLE_SHOT
    )
    assert select_strategy(make_record_set(TrivialRecordFactory.create_batch(6)), options) == (
        StrategyKind.CHUNKED
    )


def test_size_threshold_is_exclusive():
    record_set = make_record_set(RecordFactory.create_batch(2))
    cost = estimate_cost(record_set)
    assert select_strategy(record_set, AnalysisOptions(size_threshold=cost)) == (
        StrategyKind.SINGLE_SHOT
    )
    assert select_strategy(record_set, AnalysisOptions(size_threshold=cost - 1)) == (
        StrategyKind.CHUNKED
    )


def test_get_analyzer_dispatch():
    assert isinstance(get_analyzer(StrategyKind.SINGLE_SHOT), OneShotAnalyzer)
    assert isinstance(get_analyzer(StrategyKind.CHUNKED), ChunkedAnalyzer)
