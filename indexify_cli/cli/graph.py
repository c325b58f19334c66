"""Extraction graph subcommands.

- create: Create a graph from a JSON or YAML definition
- get: Show one graph of the namespace
- list: List the graphs of the namespace
"""

from __future__ import annotations

from pathlib import Path

import typer

from indexify_cli.api.models import ExtractionGraph
from indexify_cli.cli.core import load_option, namespaced_fields, run_command
from indexify_cli.commands import Graph, GraphCmd, GraphCreate, GraphGet, GraphList

app = typer.Typer(
    name="graph",
    help="Interact with extraction graphs",
    add_completion=False,
    no_args_is_help=True,
)


@app.command("create")
def create_command(
    ctx: typer.Context,
    input: Path = typer.Argument(..., help="Path to the graph file (JSON or YAML)"),
) -> None:
    """Create a new graph.

    The graph is created in --namespace unless the file names one.

    Examples:
        indexify graph create graph.yaml
        indexify -n research graph create graph.json
    """
    graph = load_option(input, ExtractionGraph, param_hint="INPUT")
    leaf = GraphCreate(graph=graph, **namespaced_fields(ctx))
    run_command(ctx, Graph(cmd=GraphCmd(create=leaf)))


@app.command("get")
def get_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the graph"),
) -> None:
    """Get a graph by name."""
    leaf = GraphGet(name=name, **namespaced_fields(ctx))
    run_command(ctx, Graph(cmd=GraphCmd(get=leaf)))


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List all the graphs in a namespace."""
    leaf = GraphList(**namespaced_fields(ctx))
    run_command(ctx, Graph(cmd=GraphCmd(list=leaf)))
