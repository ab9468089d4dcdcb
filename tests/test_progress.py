from io import StringIO

from rich.console import Console

from flowscope.utils.progress.handlers import get_display_handler, preview_names
from flowscope.utils.progress.plain_handler import PlainProgressHandler
from flowscope.utils.progress.protocol import DisplayHandler
from flowscope.utils.progress.rich_handler import RichProgressHandler
from flowscope.utils.progress.verbosity import Verbosity


def test_handler_selection():
    assert isinstance(get_display_handler(None), PlainProgressHandler)
    handler = get_display_handler(Console(file=StringIO()))
    assert isinstance(handler, RichProgressHandler)
    assert isinstance(handler, DisplayHandler)


def test_preview_names_truncates():
    assert preview_names(["A", "B"]) == "A, B"
    preview = preview_names(["x" * 50, "y" * 50], max_length=80)
    assert len(preview) == 83
    assert preview.endswith("...")


def test_plain_handler_is_silent(capsys):
    handler = PlainProgressHandler()
    handler.show_chunk_start("chunk 1/2", "A, B", Verbosity.SILENT)
    handler.show_run_complete(2, 0, 1.0, Verbosity.SILENT)
    assert capsys.readouterr().err == ""


def test_plain_handler_reports_failures(capsys):
    handler = PlainProgressHandler()
    handler.show_chunk_failed("chunk 2/2", "C", "overload", Verbosity.DETAILED, error_obj="boom")
    handler.show_run_complete(3, 1, 2.5, Verbosity.PROGRESS)
    err = capsys.readouterr().err
    assert "[chunk 2/2] Failed: overload" in err
    assert "boom" in err
    assert "2/3 records analyzed" in err


def test_rich_handler_prints_outcomes():
    buffer = StringIO()
    handler = RichProgressHandler(Console(file=buffer, width=120))
    handler.show_run_start("chunked", 4, 3, Verbosity.SUMMARY)
    handler.show_chunk_start("chunk 1/2", "A, B", Verbosity.PROGRESS)
    handler.show_chunk_complete("chunk 1/2", "A, B", 0.5, Verbosity.PROGRESS)
    handler.show_chunk_failed("chunk 2/2", "C, D", "overload", Verbosity.PROGRESS)
    handler.show_run_complete(4, 2, 3.0, Verbosity.PROGRESS)
    output = buffer.getvalue()
    assert "chunked" in output
    assert "chunk 1/2" in output
    assert "Failed: overload" in output
    assert "2/4 records analyzed" in output
