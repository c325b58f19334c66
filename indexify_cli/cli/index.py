"""Index subcommands."""

from __future__ import annotations

import typer

from indexify_cli.cli.core import namespaced_fields, run_command
from indexify_cli.commands import Index, IndexCmd, IndexList

app = typer.Typer(
    name="index",
    help="Interact with indexes",
    add_completion=False,
    no_args_is_help=True,
)


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List all indexes in the namespace."""
    leaf = IndexList(**namespaced_fields(ctx))
    run_command(ctx, Index(cmd=IndexCmd(list=leaf)))
