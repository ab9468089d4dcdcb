from typing import Any, override
from rich.console import Console
from rich.panel import Panel
from rich.status import Status

from flowscope.utils.progress.protocol import DisplayHandler
from flowscope.utils.progress.verbosity import Verbosity


class RichProgressHandler(DisplayHandler):
    """
    Stateful progress handler for Rich TUI.
    Manages the active spinner and prints one line per request.
    """

    def __init__(self, console: Console):
        self.console = console
        # Held so the spinner can be stopped when the request settles
        self._status: Status | None = None

    def _stop_spinner(self):
        if self._status:
            self._status.stop()
            self._status = None

    @override
    def show_run_start(
        self, strategy: str, record_count: int, request_count: int, verbosity: Verbosity
    ) -> None:
        if verbosity >= Verbosity.SUMMARY:
            self.console.print(
                f"[bold]{strategy}[/bold] | {record_count} records | "
                f"{request_count} request{'s' if request_count != 1 else ''}"
            )

    @override
    def show_chunk_start(self, label: str, preview: str, verbosity: Verbosity) -> None:
        if verbosity == Verbosity.SILENT:
            return

        self._stop_spinner()
        status_text = f"[bold gold1]{label}[/bold gold1] | {preview}"
        self._status = self.console.status(status_text, spinner="dots")
        self._status.start()

    @override
    def show_chunk_complete(
        self, label: str, preview: str, duration: float, verbosity: Verbosity
    ) -> None:
        self._stop_spinner()

        if verbosity == Verbosity.SILENT:
            return

        self.console.print(
            f"[green]✓[/green] [bold white]{label}[/bold white] | {preview} | [dim]({duration:.2f}s)[/dim]"
        )

    @override
    def show_chunk_failed(
        self,
        label: str,
        preview: str,
        error: str,
        verbosity: Verbosity,
        error_obj: Any | None = None,
    ) -> None:
        self._stop_spinner()

        if verbosity == Verbosity.SILENT:
            return

        self.console.print(
            f"[red]✗[/red] [bold white]{label}[/bold white] | {preview} | [red]Failed: {error}[/red]"
        )
        if error_obj is not None and verbosity >= Verbosity.DETAILED:
            self.console.print(
                Panel(str(error_obj), title="Provider error", border_style="red")
            )

    @override
    def show_run_complete(
        self,
        record_count: int,
        placeholder_count: int,
        duration: float,
        verbosity: Verbosity,
    ) -> None:
        self._stop_spinner()

        if verbosity == Verbosity.SILENT:
            return

        analyzed = record_count - placeholder_count
        color = "green" if placeholder_count == 0 else "yellow"
        self.console.print(
            f"[{color}]Analysis complete[/{color}] | {analyzed}/{record_count} records analyzed | "
            f"[dim]({duration:.2f}s)[/dim]"
        )
