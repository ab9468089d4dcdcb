"""
Configuration hierarchy:
1. Explicit parameters to functions / methods
2. Environment variables
3. settings.toml in the XDG config dir
4. Defaults (lowest priority)

settings.toml is optional. Recognized tables:

    [settings]
    default_provider = "claude"
    verbosity = "progress"

    [analysis]           # any AnalysisOptions field
    inter_chunk_delay = 2.0
    count_threshold = 20

    [providers.claude]
    model = "claude-3-5-sonnet-20241022"
    max_tokens = 8000
    temperature = 0.3
    timeout = 120
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from importlib.metadata import version, PackageNotFoundError
from pathlib import Path
from flowscope.utils.progress.verbosity import Verbosity
from rich.console import Console
from xdg_base_dirs import xdg_config_home
from typing import TYPE_CHECKING, Any
import logging
import os
import tomllib

if TYPE_CHECKING:
    from flowscope.domain.config.analysis_options import AnalysisOptions

logger = logging.getLogger(__name__)

# Directories
CONFIG_DIR = Path(xdg_config_home()) / "flowscope"
SETTINGS_TOML_PATH = CONFIG_DIR / "settings.toml"

# Version
try:
    __version__ = version("flowscope")
except PackageNotFoundError:
    __version__ = "unknown"


@dataclass(frozen=True)
class ProviderSettings:
    """
    Inference parameters for one provider. Credentials are never stored here.
    """

    model: str
    max_tokens: int = 8000
    temperature: float | None = None
    timeout: float = 120.0


DEFAULT_PROVIDERS: dict[str, ProviderSettings] = {
    "openai": ProviderSettings(model="gpt-4o", temperature=0.7),
    "claude": ProviderSettings(model="claude-3-5-sonnet-20241022", temperature=0.3),
    "mistral": ProviderSettings(model="mistral-large-latest", temperature=0.7),
    "gemini": ProviderSettings(model="gemini-1.5-flash", temperature=0.7, timeout=60.0),
}


@dataclass
class Settings:
    default_provider: str
    default_verbosity: Verbosity
    default_console: Console
    providers: dict[str, ProviderSettings]
    analysis: dict[str, Any]
    paths: dict[str, Path]
    version: str
    # Lazy loaders
    default_options: Callable[..., AnalysisOptions] = field(repr=False)

    def provider_settings(self, provider: str) -> ProviderSettings:
        try:
            return self.providers[provider]
        except KeyError:
            raise ValueError(
                f"Unknown provider '{provider}'. Expected one of: {', '.join(self.providers)}"
            ) from None


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.debug(f"No settings file at {path}; using defaults.")
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def load_settings(settings_path: Path | None = None) -> Settings:
    settings_path = settings_path or SETTINGS_TOML_PATH

    # Defaults (lowest priority)
    default_provider = "claude"
    verbosity = Verbosity.PROGRESS
    providers = dict(DEFAULT_PROVIDERS)
    analysis: dict[str, Any] = {}

    # Config file (medium priority)
    toml_config = _read_toml(settings_path)
    toml_dict = toml_config.get("settings", {})
    default_provider = toml_dict.get("default_provider", default_provider)
    if "verbosity" in toml_dict:
        verbosity = Verbosity.from_input(toml_dict["verbosity"])
    analysis.update(toml_config.get("analysis", {}))
    for provider_id, overrides in toml_config.get("providers", {}).items():
        base = providers.get(provider_id)
        if base is None:
            raise ValueError(f"Unknown provider '{provider_id}' in {settings_path}")
        providers[provider_id] = replace(base, **overrides)

    # Environment variables (highest priority)
    if os.getenv("FLOWSCOPE_PROVIDER"):
        default_provider = os.environ["FLOWSCOPE_PROVIDER"]
    if os.getenv("FLOWSCOPE_VERBOSITY"):
        verbosity = Verbosity.from_input(os.environ["FLOWSCOPE_VERBOSITY"])
    if os.getenv("FLOWSCOPE_INTER_CHUNK_DELAY"):
        analysis["inter_chunk_delay"] = float(os.environ["FLOWSCOPE_INTER_CHUNK_DELAY"])

    default_console = Console(stderr=True)
    paths = {
        "CONFIG_DIR": CONFIG_DIR,
        "SETTINGS_TOML_PATH": settings_path,
    }

    def default_options(**overrides: Any) -> AnalysisOptions:
        """
        Assemble AnalysisOptions from settings. Keyword arguments win over file/env values.
        """
        from flowscope.domain.config.analysis_options import AnalysisOptions

        values: dict[str, Any] = {
            "verbosity": verbosity,
            "console": default_console,
        }
        values.update(analysis)
        values.update(overrides)
        return AnalysisOptions(**values)

    return Settings(
        default_provider=default_provider,
        default_verbosity=verbosity,
        default_console=default_console,
        providers=providers,
        analysis=analysis,
        paths=paths,
        version=__version__,
        default_options=default_options,
    )


# Singleton
settings = load_settings()
