"""
Tests for error rendering at the CLI boundary.

Test Strategy
-------------
- Render into an in-memory console and inspect the text
- Cause chains and context sections appear in the panel
- Verbose mode adds the traceback
- CLIErrorHandler turns failures into exit codes

Organization
------------
- TestErrorRenderer: panel content
- TestCLIErrorHandler: exit codes and the on_error hook
"""

import io

import pytest
import typer
from rich.console import Console

from indexify_cli.cli import console as console_module
from indexify_cli.cli.console import ErrorRenderer, set_verbose_mode
from indexify_cli.cli.core import CLIErrorHandler
from indexify_cli.cli.core.error_handlers import EXIT_FAILURE, EXIT_INTERRUPTED
from indexify_cli.core.exceptions import NotFoundError, TransportError


@pytest.fixture
def error_output(monkeypatch):
    """Redirect the shared stderr console into a buffer."""
    buffer = io.StringIO()
    monkeypatch.setattr(
        console_module,
        "_error_console",
        Console(file=buffer, width=100, color_system=None),
    )
    return buffer


class TestErrorRenderer:
    def test_error_code_and_message(self, error_output):
        ErrorRenderer.render(NotFoundError("Graph not found: embed"))

        text = error_output.getvalue()
        assert "Error: IDX-NF-000" in text
        assert "Graph not found: embed" in text

    def test_foreign_exception_code(self, error_output):
        ErrorRenderer.render(RuntimeError("boom"))
        assert "IDX-ERR-999" in error_output.getvalue()

    def test_empty_message_uses_type_name(self, error_output):
        ErrorRenderer.render(KeyError())
        assert "KeyError" in error_output.getvalue()

    def test_cause_chain(self, error_output):
        try:
            try:
                raise ConnectionError("connection refused")
            except ConnectionError as e:
                raise TransportError("GET /namespaces failed", url="/ns") from e
        except TransportError as error:
            ErrorRenderer.render(error)

        text = error_output.getvalue()
        assert "Caused by:" in text
        assert "0: connection refused" in text

    def test_sections(self, error_output):
        error = TransportError(
            "500 Internal Server Error", url="/extractors", body="stack overflow"
        )
        ErrorRenderer.render(error)

        text = error_output.getvalue()
        assert "Body:" in text
        assert "stack overflow" in text

    def test_context_line(self, error_output):
        ErrorRenderer.render(RuntimeError("boom"), context="while listing graphs")
        assert "while listing graphs" in error_output.getvalue()

    def test_traceback_only_when_verbose(self, error_output):
        ErrorRenderer.render(RuntimeError("quiet"))
        assert "Traceback" not in error_output.getvalue()

        set_verbose_mode(True)
        ErrorRenderer.render(RuntimeError("loud"))
        assert "Traceback" in error_output.getvalue()

    def test_traceback_override(self, error_output):
        ErrorRenderer.render(RuntimeError("boom"), show_traceback=True)
        assert "Traceback" in error_output.getvalue()


class TestCLIErrorHandler:
    def test_result_passed_through(self):
        assert CLIErrorHandler.wrap_operation(lambda: 42) == 42

    def test_failure_exits_one(self, error_output):
        def fail():
            raise NotFoundError("Namespace not found: x")

        with pytest.raises(typer.Exit) as exc_info:
            CLIErrorHandler.wrap_operation(fail)

        assert exc_info.value.exit_code == EXIT_FAILURE
        assert "Namespace not found: x" in error_output.getvalue()

    def test_on_error_called_before_exit(self, error_output):
        seen = []

        def fail():
            raise RuntimeError("boom")

        with pytest.raises(typer.Exit):
            CLIErrorHandler.wrap_operation(fail, on_error=seen.append)

        assert [str(e) for e in seen] == ["boom"]

    def test_keyboard_interrupt(self, error_output):
        def interrupt():
            raise KeyboardInterrupt

        with pytest.raises(typer.Exit) as exc_info:
            CLIErrorHandler.wrap_operation(interrupt)

        assert exc_info.value.exit_code == EXIT_INTERRUPTED
        assert "Interrupted by user" in error_output.getvalue()
