from __future__ import annotations
from enum import Enum
from flowscope.core.batching.size import estimate_cost
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from flowscope.domain.config.analysis_options import AnalysisOptions
    from flowscope.domain.record.record import RecordSet
    from flowscope.strategies.analyze.strategy import AnalysisStrategy

logger = logging.getLogger(__name__)


class StrategyKind(Enum):
    SINGLE_SHOT = "single_shot"
    CHUNKED = "chunked"


def select_strategy(
    record_set: RecordSet, options: AnalysisOptions | None = None
) -> StrategyKind:
    """
    CHUNKED when the serialized set is larger than size_threshold or holds more than
    count_threshold records; SINGLE_SHOT otherwise.
    """
    if options is None:
        from flowscope.domain.config.analysis_options import AnalysisOptions

        options = AnalysisOptions()

    cost = estimate_cost(record_set)
    if cost > options.size_threshold or record_set.count > options.count_threshold:
        kind = StrategyKind.CHUNKED
    else:
        kind = StrategyKind.SINGLE_SHOT
    logger.info(f"{record_set.count} records, {cost} chars serialized -> {kind.value}")
    return kind


def get_analyzer(kind: StrategyKind) -> AnalysisStrategy:
    match kind:
        case StrategyKind.SINGLE_SHOT:
            from flowscope.strategies.analyze.analyzers.one_shot import OneShotAnalyzer

            return OneShotAnalyzer()
        case StrategyKind.CHUNKED:
            from flowscope.strategies.analyze.analyzers.chunked import ChunkedAnalyzer

            return ChunkedAnalyzer()
    raise ValueError(f"Unknown strategy: {kind}")
