"""Index commands: list the indexes of a namespace."""

from __future__ import annotations

from indexify_cli.client import INDEXES
from indexify_cli.commands.base import NamespacedCommand
from indexify_cli.core.command import Command, Selector, subcommand
from indexify_cli.core.container import command, selector
from indexify_cli.core.logging import get_logger

logger = get_logger(__name__)


@command
class IndexList(NamespacedCommand):
    """List all indexes in a namespace."""

    async def run(self) -> None:
        logger.activity("index::list", namespace=self.namespace)
        self.output.list(await self.client.list(INDEXES))


@selector
class IndexCmd(Selector):
    list: IndexList


@command
class Index(Command):
    """Interact with indexes."""

    cmd: IndexCmd = subcommand()
