from __future__ import annotations
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d (%(funcName)s) - %(message)s"

# Libraries that log every HTTP request at INFO
NOISY_LIBRARIES = ["urllib3", "httpx", "httpcore", "openai", "anthropic"]

_LEVELS = {"d": logging.DEBUG, "i": logging.INFO, "w": logging.WARNING, "e": logging.ERROR}


def parse_level(level: int | str | None) -> int:
    """
    Accepts logging constants, names ("info") or first letters ("i").
    """
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    lowered = level.strip().lower()
    if lowered[:1] in _LEVELS:
        return _LEVELS[lowered[:1]]
    raise ValueError(f"Invalid log level: {level}")


def configure_logging(level: int | str | None = None) -> bool:
    """
    Configure root logging for script / CLI use.
    If logging is already configured (library usage), the existing setup is respected.
    Returns True when this call installed the handler.
    """
    root = logging.getLogger()
    if root.handlers:
        logging.getLogger(__name__).debug("Logging already configured, using existing setup")
        return False

    logging.basicConfig(level=parse_level(level), format=LOG_FORMAT, stream=sys.stderr)

    for lib in NOISY_LIBRARIES:
        logging.getLogger(lib).setLevel(logging.WARNING)
    return True
