import sys
from typing import Any, override
from datetime import datetime
from flowscope.utils.progress.protocol import DisplayHandler
from flowscope.utils.progress.verbosity import Verbosity


class PlainProgressHandler(DisplayHandler):
    """
    Append-only progress handler.
    Writes to STDERR so it doesn't corrupt piped output.
    """

    def _get_timestamp(self) -> str:
        return datetime.now().strftime("[%H:%M:%S]")

    def _emit(self, line: str) -> None:
        print(f"{self._get_timestamp()} {line}", file=sys.stderr, flush=True)

    @override
    def show_run_start(
        self, strategy: str, record_count: int, request_count: int, verbosity: Verbosity
    ) -> None:
        if verbosity >= Verbosity.SUMMARY:
            self._emit(f"[{strategy}] {record_count} records, {request_count} requests")

    @override
    def show_chunk_start(self, label: str, preview: str, verbosity: Verbosity) -> None:
        if verbosity >= Verbosity.PROGRESS:
            self._emit(f"[{label}] Starting: {preview}")

    @override
    def show_chunk_complete(
        self, label: str, preview: str, duration: float, verbosity: Verbosity
    ) -> None:
        if verbosity >= Verbosity.PROGRESS:
            self._emit(f"[{label}] Completed ({duration:.2f}s)")

    @override
    def show_chunk_failed(
        self,
        label: str,
        preview: str,
        error: str,
        verbosity: Verbosity,
        error_obj: Any | None = None,
    ) -> None:
        if verbosity >= Verbosity.PROGRESS:
            self._emit(f"[{label}] Failed: {error}")

        if error_obj is not None and verbosity >= Verbosity.DETAILED:
            print(str(error_obj), file=sys.stderr, flush=True)

    @override
    def show_run_complete(
        self,
        record_count: int,
        placeholder_count: int,
        duration: float,
        verbosity: Verbosity,
    ) -> None:
        if verbosity >= Verbosity.PROGRESS:
            analyzed = record_count - placeholder_count
            self._emit(
                f"Analysis complete: {analyzed}/{record_count} records analyzed ({duration:.2f}s)"
            )
