"""Namespace subcommands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from indexify_cli.api.models import CreateNamespace
from indexify_cli.cli.core import load_option, run_command, service_fields
from indexify_cli.commands import (
    Namespace,
    NamespaceCmd,
    NamespaceCreate,
    NamespaceGet,
    NamespaceList,
)

app = typer.Typer(
    name="namespace",
    help="Interact with namespaces",
    add_completion=False,
    no_args_is_help=True,
)


@app.command("create")
def create_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Name of the namespace"),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Path to a file containing the namespace definition"
    ),
) -> None:
    """Create a new namespace.

    Examples:
        indexify namespace create research
        indexify namespace create --file namespace.yaml
    """
    definition = None
    if file is not None:
        definition = load_option(file, CreateNamespace, param_hint="--file")

    leaf = NamespaceCreate(name=name, definition=definition, **service_fields(ctx))
    run_command(ctx, Namespace(cmd=NamespaceCmd(create=leaf)))


@app.command("get")
def get_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the namespace"),
) -> None:
    """Get a specific namespace."""
    leaf = NamespaceGet(name=name, **service_fields(ctx))
    run_command(ctx, Namespace(cmd=NamespaceCmd(get=leaf)))


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List all namespaces."""
    leaf = NamespaceList(**service_fields(ctx))
    run_command(ctx, Namespace(cmd=NamespaceCmd(list=leaf)))
