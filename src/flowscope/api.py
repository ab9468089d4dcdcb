# Entry points
from flowscope.analyze import analyze, analyze_sync, run_analysis, to_record_set
from flowscope.core.chat.followup import ask_followup, explore_records
from flowscope.core.clients.clients import complete, get_client
from flowscope.core.orchestration.context import RunContext
from flowscope.utils.versions import filter_latest_versions

# Primitives: models / enums
from flowscope.core.clients.provider import ProviderId
from flowscope.domain.record.record import Record, RecordSet
from flowscope.domain.result.analysis import AnalysisEntry, AnalysisResult
from flowscope.domain.exceptions.exceptions import (
    ErrorCode,
    FlowscopeError,
    ProviderError,
    RecordSetError,
)
from flowscope.utils.progress.verbosity import Verbosity

# Configs
from flowscope.domain.config.analysis_options import AnalysisOptions, RetryPolicy
from flowscope.utils.log_setup import configure_logging


__all__ = [
    "AnalysisEntry",
    "AnalysisOptions",
    "AnalysisResult",
    "ErrorCode",
    "FlowscopeError",
    "ProviderError",
    "ProviderId",
    "Record",
    "RecordSet",
    "RecordSetError",
    "RetryPolicy",
    "RunContext",
    "Verbosity",
    "analyze",
    "analyze_sync",
    "ask_followup",
    "complete",
    "configure_logging",
    "explore_records",
    "filter_latest_versions",
    "get_client",
    "run_analysis",
    "to_record_set",
]
