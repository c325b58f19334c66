"""Extractor subcommands."""

from __future__ import annotations

import typer

from indexify_cli.cli.core import run_command, service_fields
from indexify_cli.commands import Extractor, ExtractorCmd, ExtractorList

app = typer.Typer(
    name="extractor",
    help="Interact with extractors",
    add_completion=False,
    no_args_is_help=True,
)


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List all extractors."""
    leaf = ExtractorList(**service_fields(ctx))
    run_command(ctx, Extractor(cmd=ExtractorCmd(list=leaf)))
