"""Glue between typer functions and the dispatch loop.

A typer function parses its arguments, builds the node for its resource
group and calls run_command(), which puts the global options on a Root and
hands the chain to dispatch().
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import typer

from indexify_cli.cli.core.error_handlers import CLIErrorHandler
from indexify_cli.commands import Root, RootCmd
from indexify_cli.core.command import Command
from indexify_cli.core.config import Settings
from indexify_cli.core.dispatch import dispatch
from indexify_cli.core.exceptions import IndexifyError
from indexify_cli.core.files import load_file
from indexify_cli.core.logging import flush_logging, get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def get_settings(ctx: typer.Context) -> Settings:
    """Settings stored by the root callback, or the defaults."""
    settings = ctx.find_object(Settings)
    return settings if settings is not None else Settings()


def service_fields(ctx: typer.Context) -> Dict[str, Any]:
    """Global values every leaf command receives."""
    settings = get_settings(ctx)
    return {"api_server": settings.api_server, "output": settings.output}


def namespaced_fields(ctx: typer.Context) -> Dict[str, Any]:
    """Global values of leaf commands working inside a namespace."""
    return {**service_fields(ctx), "namespace": get_settings(ctx).namespace}


def load_option(path: Path, model: Type[T], param_hint: str) -> T:
    """Load a definition file given as an argument.

    Raises:
        typer.BadParameter: If the file cannot be loaded into ``model``
    """
    try:
        return load_file(path, model)
    except IndexifyError as e:
        raise typer.BadParameter(str(e), param_hint=param_hint) from e


def build_root(settings: Settings, group: Command) -> Root:
    """The full chain for ``group`` under a root carrying ``settings``."""
    return Root(
        cmd=RootCmd.of(group),
        api_server=settings.api_server,
        output=settings.output,
        namespace=settings.namespace,
        verbosity=settings.verbosity,
        telemetry=settings.telemetry,
        log_file=settings.log_file,
    )


def _report_failure(error: Exception) -> None:
    # Picked up by telemetry; the console shows the error panel instead
    logger.info(
        "Command failed", error=str(error), error_type=type(error).__name__
    )


def run_command(ctx: typer.Context, group: Command) -> None:
    """Dispatch ``group`` (e.g. a Graph node) under the root command.

    Raises:
        typer.Exit: With code 1 when the command fails, 130 when interrupted
    """
    root = build_root(get_settings(ctx), group)
    try:
        CLIErrorHandler.wrap_operation(lambda: dispatch(root), _report_failure)
    finally:
        flush_logging()
