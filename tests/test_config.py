import logging

import pytest
from pydantic import ValidationError

from flowscope.config import DEFAULT_PROVIDERS, load_settings
from flowscope.domain.config.analysis_options import AnalysisOptions, RetryPolicy
from flowscope.utils.log_setup import configure_logging, parse_level
from flowscope.utils.progress.verbosity import Verbosity

SETTINGS_TOML = """
[settings]
default_provider = "openai"
verbosity = "summary"

[analysis]
inter_chunk_delay = 1.5
count_threshold = 20

[providers.claude]
model = "claude-3-opus-20240229"
temperature = 0.1
"""


# Settings
# ---

def test_defaults_without_settings_file(tmp_path):
    settings = load_settings(tmp_path / "missing.toml")
    assert settings.default_provider == "claude"
    assert settings.default_verbosity is Verbosity.PROGRESS
    assert settings.providers == DEFAULT_PROVIDERS
    options = settings.default_options()
    assert options.inter_chunk_delay == 5.0
    assert options.max_chunk_records == 2


def test_settings_file_overrides_defaults(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(SETTINGS_TOML)

    settings = load_settings(path)

    assert settings.default_provider == "openai"
    assert settings.default_verbosity is Verbosity.SUMMARY
    claude = settings.provider_settings("claude")
    assert claude.model == "claude-3-opus-20240229"
    assert claude.temperature == 0.1
    assert claude.max_tokens == 8000
    options = settings.default_options()
    assert options.inter_chunk_delay == 1.5
    assert options.count_threshold == 20


def test_environment_wins_over_settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.toml"
    path.write_text(SETTINGS_TOML)
    monkeypatch.setenv("FLOWSCOPE_PROVIDER", "gemini")
    monkeypatch.setenv("FLOWSCOPE_VERBOSITY", "silent")
    monkeypatch.setenv("FLOWSCOPE_INTER_CHUNK_DELAY", "0")

    settings = load_settings(path)

    assert settings.default_provider == "gemini"
    assert settings.default_verbosity is Verbosity.SILENT
    assert settings.default_options().inter_chunk_delay == 0.0


def test_explicit_overrides_win(tmp_path):
    settings = load_settings(tmp_path / "missing.toml")
    options = settings.default_options(inter_chunk_delay=0.0, verbosity="vvv")
    assert options.inter_chunk_delay == 0.0
    assert options.verbosity is Verbosity.DETAILED


def test_unknown_provider_table_is_rejected(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text('[providers.cohere]\nmodel = "command-r"\n')
    with pytest.raises(ValueError):
        load_settings(path)


def test_unknown_provider_lookup(tmp_path):
    with pytest.raises(ValueError):
        load_settings(tmp_path / "missing.toml").provider_settings("cohere")


# Options
# ---

def test_retry_delays_double():
    policy = RetryPolicy()
    assert [policy.delay_for(n) for n in (1, 2, 3)] == [3.0, 6.0, 12.0]


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, Verbosity.SILENT),
        (3, Verbosity.DETAILED),
        ("debug", Verbosity.DEBUG),
        ("vv", Verbosity.SUMMARY),
        (True, Verbosity.PROGRESS),
        (Verbosity.SUMMARY, Verbosity.SUMMARY),
    ],
)
def test_verbosity_coercion(value, expected):
    assert AnalysisOptions(verbosity=value).verbosity is expected


def test_invalid_options_are_rejected():
    with pytest.raises(ValidationError):
        AnalysisOptions(max_chunk_records=0)
    with pytest.raises(ValidationError):
        AnalysisOptions(verbosity="loud")


def test_verbosity_ordering():
    assert Verbosity.SILENT < Verbosity.PROGRESS <= Verbosity.SUMMARY
    assert not Verbosity.SILENT
    assert Verbosity.DEBUG > Verbosity.DETAILED


# Logging
# ---

@pytest.mark.parametrize(
    "level, expected",
    [
        (None, logging.WARNING),
        ("info", logging.INFO),
        ("D", logging.DEBUG),
        (logging.ERROR, logging.ERROR),
    ],
)
def test_parse_level(level, expected):
    assert parse_level(level) == expected


def test_parse_level_rejects_garbage():
    with pytest.raises(ValueError):
        parse_level("loud")


def test_configure_logging_respects_existing_handlers(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    assert configure_logging("debug") is False


def test_configure_logging_installs_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    assert configure_logging("info") is True
    assert root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
