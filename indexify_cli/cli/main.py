"""indexify CLI - Main application entry point.

Registers one sub-application per resource group. The root callback parses
the global options into a Settings value that each leaf reads when it
builds its command chain:

    indexify [GLOBAL OPTIONS] <group> <command> [ARGS]

    indexify -o json -n research graph list
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from indexify_cli import __version__
from indexify_cli.cli.content import app as content_app
from indexify_cli.cli.extractor import app as extractor_app
from indexify_cli.cli.graph import app as graph_app
from indexify_cli.cli.index import app as index_app
from indexify_cli.cli.namespace import app as namespace_app
from indexify_cli.client import DEFAULT_SERVICE_URL, Client
from indexify_cli.core.config import (
    API_SERVER_ENV_VAR,
    DEFAULT_NAMESPACE,
    NAMESPACE_ENV_VAR,
    TELEMETRY_ENV_VAR,
    Settings,
)
from indexify_cli.core.exceptions import ValidationError
from indexify_cli.output import Format

# Create main Typer application
app = typer.Typer(
    name="indexify",
    help="Interact with the indexify service",
    add_completion=True,
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"indexify-cli {__version__}")
        raise typer.Exit()


def parse_api_server(value: str) -> Client:
    """Validate --api-server while arguments are parsed."""
    try:
        return Client.parse(value)
    except ValidationError as e:
        raise typer.BadParameter(str(e), param_hint="--api-server") from e


@app.callback()
def main_callback(
    ctx: typer.Context,
    api_server: str = typer.Option(
        DEFAULT_SERVICE_URL,
        "--api-server",
        envvar=API_SERVER_ENV_VAR,
        help="URL of the indexify service",
    ),
    output: Format = typer.Option(
        Format.PRETTY, "--output", "-o", help="Output format"
    ),
    namespace: str = typer.Option(
        DEFAULT_NAMESPACE,
        "--namespace",
        "-n",
        envvar=NAMESPACE_ENV_VAR,
        help="Namespace containing the resources",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Verbosity level, pass extra v's to increase verbosity",
    ),
    telemetry: bool = typer.Option(
        True,
        "--telemetry/--no-telemetry",
        envvar=TELEMETRY_ENV_VAR,
        help="Enable or disable telemetry",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write logs to this file"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Interact with the indexify service."""
    ctx.obj = Settings(
        api_server=parse_api_server(api_server),
        output=output,
        namespace=namespace,
        verbosity=verbose,
        telemetry=telemetry,
        log_file=log_file,
    )


# Register resource groups
app.add_typer(content_app, name="content")
app.add_typer(extractor_app, name="extractor")
app.add_typer(graph_app, name="graph")
app.add_typer(index_app, name="index")
app.add_typer(namespace_app, name="namespace")


def cli_main() -> None:
    """Entry point for console_scripts.

    This function is called when running the 'indexify' command.
    """
    app()


if __name__ == "__main__":
    cli_main()
