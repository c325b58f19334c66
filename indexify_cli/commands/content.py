"""Content commands: inspect, upload, download and delete content."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Optional, Tuple

from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from indexify_cli.api.models import ContentIds
from indexify_cli.cli.console import get_error_console
from indexify_cli.client import CONTENT, DOWNLOAD, UPLOAD
from indexify_cli.commands.base import NamespacedCommand
from indexify_cli.core.command import Command, Selector, subcommand
from indexify_cli.core.container import command, selector
from indexify_cli.core.exceptions import ValidationError
from indexify_cli.core.logging import get_logger

logger = get_logger(__name__)


def progress_bar(size: Optional[int]) -> Progress:
    """Progress display for a download; a spinner when the size is unknown."""
    if size is None:
        columns = (
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            DownloadColumn(),
        )
    else:
        columns = (
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            BarColumn(complete_style="cyan", finished_style="blue"),
            DownloadColumn(),
            TransferSpeedColumn(),
            TextColumn("eta"),
            TimeRemainingColumn(),
        )
    return Progress(*columns, console=get_error_console(), transient=False)


@command
class ContentDelete(NamespacedCommand):
    """Delete a piece of content."""

    id: str

    async def run(self) -> None:
        logger.activity("content::delete", namespace=self.namespace, id=self.id)
        await self.client.delete(CONTENT, ContentIds(content_ids=[self.id]))


@command
class ContentDownload(NamespacedCommand):
    """Download a piece of content to a file, or to stdout without one."""

    id: str
    file: Optional[Path] = None

    async def _to_file(
        self, path: Path, size: Optional[int], chunks: AsyncIterator[bytes]
    ) -> None:
        try:
            writer = path.open("wb")
        except OSError as e:
            raise ValidationError(f"Cannot write {path}: {e}") from e

        with writer, progress_bar(size) as progress:
            task = progress.add_task("download", total=size)
            async for chunk in chunks:
                writer.write(chunk)
                progress.advance(task, len(chunk))

    async def _to_stdout(self, chunks: AsyncIterator[bytes]) -> None:
        sys.stdout.flush()
        out: BinaryIO = sys.stdout.buffer
        async for chunk in chunks:
            out.write(chunk)
        out.flush()

    async def run(self) -> None:
        logger.activity("content::download", namespace=self.namespace, id=self.id)

        async with self.client.stream(DOWNLOAD, self.id) as (size, chunks):
            logger.debug("Downloading content", id=self.id, size=size)
            if self.file is not None:
                await self._to_file(self.file, size, chunks)
            else:
                await self._to_stdout(chunks)


@command
class ContentGet(NamespacedCommand):
    """Get the details of a piece of content."""

    id: str

    async def run(self) -> None:
        logger.activity("content::get", namespace=self.namespace, id=self.id)
        self.output.item(await self.client.get(CONTENT, self.id))


@command
class ContentList(NamespacedCommand):
    """List all the content in a namespace."""

    async def run(self) -> None:
        logger.activity("content::list", namespace=self.namespace)
        self.output.list(await self.client.list(CONTENT))


@command
class ContentUpload(NamespacedCommand):
    """Upload a piece of content into one or more extraction graphs."""

    path: Path
    graph: Tuple[str, ...] = ()

    async def run(self) -> None:
        if not self.graph:
            raise ValidationError("At least one extraction graph is required")

        logger.activity("content::upload", namespace=self.namespace)
        logger.info("Uploading content", path=str(self.path), graphs=self.graph)
        await self.client.upload(UPLOAD, self.path, self.graph)


@selector
class ContentCmd(Selector):
    delete: ContentDelete
    download: ContentDownload
    get: ContentGet
    list: ContentList
    upload: ContentUpload


@command
class Content(Command):
    """Work with content, such as downloading it or examining its metadata."""

    cmd: ContentCmd = subcommand()
