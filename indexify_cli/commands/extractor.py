"""Extractor commands: list the extractors registered with the service."""

from __future__ import annotations

from indexify_cli.client import EXTRACTORS
from indexify_cli.commands.base import ServiceCommand
from indexify_cli.core.command import Command, Selector, subcommand
from indexify_cli.core.container import command, selector
from indexify_cli.core.logging import get_logger

logger = get_logger(__name__)


@command
class ExtractorList(ServiceCommand):
    """List all extractors."""

    async def run(self) -> None:
        logger.activity("extractor::list")
        self.output.list(await self.api_server.list(EXTRACTORS))


@selector
class ExtractorCmd(Selector):
    list: ExtractorList


@command
class Extractor(Command):
    """Interact with extractors."""

    cmd: ExtractorCmd = subcommand()
