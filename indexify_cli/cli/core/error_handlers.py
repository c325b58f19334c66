"""Standard error handling for CLI commands.

Errors that escape the dispatch loop end up here: they are rendered as an
error panel on stderr (with tracebacks at -vv) and turned into an exit code.
"""

from __future__ import annotations

from typing import Any, Callable

import typer

from indexify_cli.cli.console import ErrorRenderer, get_error_console

#: Exit code for a failed command
EXIT_FAILURE = 1

#: Standard exit code for SIGINT
EXIT_INTERRUPTED = 130


class CLIErrorHandler:
    """Centralized error handling with consistent formatting.

    Example:
        try:
            dispatch(root)
        except Exception as e:
            CLIErrorHandler.exit_on_error(e)
    """

    @staticmethod
    def handle_error(error: BaseException, context: str = "") -> None:
        """Display an error panel for ``error``.

        Args:
            error: Exception to display
            context: Optional context message shown above the error
        """
        ErrorRenderer.render(error, context=context)

    @staticmethod
    def exit_on_error(
        error: BaseException,
        context: str = "",
        exit_code: int = EXIT_FAILURE,
    ) -> None:
        """Handle error and exit CLI with appropriate exit code.

        Raises:
            typer.Exit: Always raises to exit CLI
        """
        CLIErrorHandler.handle_error(error, context)
        raise typer.Exit(exit_code)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle Ctrl+C gracefully."""
        get_error_console().print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED)

    @staticmethod
    def wrap_operation(
        operation: Callable[[], Any],
        on_error: Callable[[Exception], Any] | None = None,
    ) -> Any:
        """Run ``operation``, exiting the CLI if it fails.

        Args:
            operation: Callable to execute
            on_error: Called with the exception before it is rendered

        Returns:
            Operation result

        Raises:
            typer.Exit: On error or interruption
        """
        try:
            return operation()
        except KeyboardInterrupt:
            CLIErrorHandler.handle_keyboard_interrupt()
        except Exception as e:
            if on_error:
                on_error(e)
            CLIErrorHandler.exit_on_error(e)
