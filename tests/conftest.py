import sys
from pathlib import Path

import pytest

from flowscope.domain.config.analysis_options import AnalysisOptions, RetryPolicy
from flowscope.utils.progress.verbosity import Verbosity

# Add project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

PROVIDER_ENV_VARS = [
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "MISTRAL_API_KEY",
    "GOOGLE_API_KEY",
    "FLOWSCOPE_PROVIDER",
    "FLOWSCOPE_VERBOSITY",
    "FLOWSCOPE_INTER_CHUNK_DELAY",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """
    Tests never see real credentials or user overrides from the developer's shell.
    """
    for var in PROVIDER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def silent_options() -> AnalysisOptions:
    """
    No display output, no pacing delays, no backoff sleeps.
    """
    return AnalysisOptions(
        verbosity=Verbosity.SILENT,
        console=None,
        inter_chunk_delay=0.0,
        retry=RetryPolicy(max_attempts=4, base_delay=0.0),
    )
