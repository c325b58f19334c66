"""Console output helpers.

Command output goes to stdout through get_console(); diagnostics and errors
go to stderr through get_error_console() so piping JSON output stays clean.

Includes ErrorRenderer, which prints an error together with its cause chain
and any context sections collected while it propagated.
"""

from __future__ import annotations

import traceback
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from indexify_cli.core.exceptions import IndexifyError, error_chain

# Shared console instances
_console: Console | None = None
_error_console: Console | None = None

# Verbose mode flag (set by CLI --verbose flag)
_verbose_mode: bool = False


def get_console() -> Console:
    """Get shared stdout console instance (lazy-loaded)."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_error_console() -> Console:
    """Get shared stderr console instance (lazy-loaded)."""
    global _error_console
    if _error_console is None:
        _error_console = Console(stderr=True)
    return _error_console


def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable full tracebacks in error output."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose_mode


class ErrorRenderer:
    """Renders an exception chain as an error panel on stderr.

    Example output:

        ╭──────────── Error: IDX-NET-000 ────────────╮
        │ 404 Not Found for http://.../namespaces/x │
        │                                            │
        │ Caused by:                                 │
        │   0: ...                                   │
        │                                            │
        │ Body:                                      │
        │   {"errors": "namespace not found"}        │
        ╰────────────────────────────────────────────╯
    """

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Render an exception as an error panel.

        Args:
            exc: Exception to render
            context: Optional context line shown above the message
            show_traceback: Override for verbose mode (None = use global setting)
        """
        console = get_error_console()
        code = exc.error_code if isinstance(exc, IndexifyError) else "IDX-ERR-999"

        panel = Panel(
            ErrorRenderer.build_content(exc, context),
            title=f"[bold red]Error: {code}[/bold red]",
            title_align="left",
            border_style="red",
            padding=(0, 1),
        )
        console.print(panel)

        should_show_traceback = (
            show_traceback if show_traceback is not None else is_verbose_mode()
        )
        if should_show_traceback:
            console.print("[dim]--- Traceback (--verbose mode) ---[/dim]")
            lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
            console.print(
                "".join(lines),
                markup=False,
                highlight=False,
            )

    @staticmethod
    def build_content(exc: BaseException, context: str = "") -> Group:
        """Message, cause chain and context sections of ``exc``."""
        chain = error_chain(exc)
        parts = []

        if context:
            parts.append(Text(context, style="dim"))

        parts.append(Text(str(exc) or type(exc).__name__, style="bold red"))

        causes = chain[1:]
        if causes:
            text = Text("\nCaused by:\n", style="bold yellow")
            for i, cause in enumerate(causes):
                message = str(cause) or type(cause).__name__
                text.append(f"  {i}: {message}\n", style="yellow")
            parts.append(text)

        for err in chain:
            if not isinstance(err, IndexifyError):
                continue
            for header, body in err.sections:
                text = Text(f"\n{header}\n", style="bold cyan")
                text.append(body.rstrip() or "<empty>")
                parts.append(text)

        return Group(*parts)
