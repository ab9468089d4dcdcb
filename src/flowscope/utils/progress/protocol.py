from typing import Protocol, runtime_checkable, Any
from flowscope.utils.progress.verbosity import Verbosity


@runtime_checkable
class DisplayHandler(Protocol):
    """
    Protocol for handling run feedback (spinners, logs, completion markers).
    Abstracts the difference between Rich (TUI) and Plain (CLI/Logs).
    """

    def show_run_start(
        self, strategy: str, record_count: int, request_count: int, verbosity: Verbosity
    ) -> None:
        """
        Announce a run: which strategy and how many provider requests it will make.
        """
        ...

    def show_chunk_start(self, label: str, preview: str, verbosity: Verbosity) -> None:
        """
        Display the in-flight state for one request (spinner or 'Starting...' line).
        """
        ...

    def show_chunk_complete(
        self, label: str, preview: str, duration: float, verbosity: Verbosity
    ) -> None:
        """
        Display success state for one request (Green Check or 'Completed').
        """
        ...

    def show_chunk_failed(
        self,
        label: str,
        preview: str,
        error: str,
        verbosity: Verbosity,
        error_obj: Any | None = None,
    ) -> None:
        """
        Display failure state for one request. The run continues.
        Detailed error info is shown from DETAILED upward.
        """
        ...

    def show_run_complete(
        self,
        record_count: int,
        placeholder_count: int,
        duration: float,
        verbosity: Verbosity,
    ) -> None:
        """
        Final one-liner for the run.
        """
        ...
