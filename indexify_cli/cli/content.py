"""Content subcommands.

- delete: Delete a piece of content
- download: Download a piece of content to a file or stdout
- get: Show a piece of content's metadata
- list: List all content in the namespace
- upload: Upload a file into one or more extraction graphs
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from indexify_cli.cli.core import namespaced_fields, run_command
from indexify_cli.commands import (
    Content,
    ContentCmd,
    ContentDelete,
    ContentDownload,
    ContentGet,
    ContentList,
    ContentUpload,
)
from indexify_cli.core.command import Command

app = typer.Typer(
    name="content",
    help="Work with content, such as downloading it or examining its metadata",
    add_completion=False,
    no_args_is_help=True,
)


def _run(ctx: typer.Context, leaf: Command) -> None:
    run_command(ctx, Content(cmd=ContentCmd.of(leaf)))


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    id: str = typer.Argument(..., help="ID of the content"),
) -> None:
    """Delete a piece of content."""
    _run(ctx, ContentDelete(id=id, **namespaced_fields(ctx)))


@app.command("download")
def download_command(
    ctx: typer.Context,
    id: str = typer.Argument(..., help="ID of the content"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="Path to save the content to"
    ),
) -> None:
    """Download a piece of content locally.

    Without --file the raw bytes are written to stdout.

    Examples:
        indexify content download 4f2a -f report.pdf
        indexify content download 4f2a > report.pdf
    """
    _run(ctx, ContentDownload(id=id, file=file, **namespaced_fields(ctx)))


@app.command("get")
def get_command(
    ctx: typer.Context,
    id: str = typer.Argument(..., help="ID of the content"),
) -> None:
    """Get the details of a piece of content."""
    _run(ctx, ContentGet(id=id, **namespaced_fields(ctx)))


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List all the content in a namespace."""
    _run(ctx, ContentList(**namespaced_fields(ctx)))


@app.command("upload")
def upload_command(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to get the content from",
    ),
    graph: List[str] = typer.Option(
        ...,
        "--graph",
        "-g",
        help="Name of the graph the content is associated with (repeatable)",
    ),
) -> None:
    """Upload a piece of content.

    Examples:
        indexify content upload paper.pdf -g summarize -g embed
    """
    leaf = ContentUpload(path=path, graph=tuple(graph), **namespaced_fields(ctx))
    _run(ctx, leaf)
