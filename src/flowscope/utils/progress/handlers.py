from __future__ import annotations
from flowscope.utils.progress.plain_handler import PlainProgressHandler
from flowscope.utils.progress.rich_handler import RichProgressHandler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from rich.console import Console
    from flowscope.utils.progress.protocol import DisplayHandler


def get_display_handler(console: Console | None) -> DisplayHandler:
    """
    Rich output when a console is configured, plain stderr lines otherwise.
    """
    if console is not None:
        return RichProgressHandler(console)
    return PlainProgressHandler()


def preview_names(names: Sequence[str], max_length: int = 80) -> str:
    """
    Comma-joined record names, truncated for a one-line display.
    """
    content = ", ".join(name.strip().replace("\n", " ") for name in names)
    if len(content) > max_length:
        return content[:max_length] + "..."
    return content
