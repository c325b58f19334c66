"""Namespace commands."""

from __future__ import annotations

from typing import Optional

from indexify_cli.api.models import CreateNamespace
from indexify_cli.client import NAMESPACES
from indexify_cli.commands.base import ServiceCommand
from indexify_cli.core.command import Command, Selector, subcommand
from indexify_cli.core.container import command, selector
from indexify_cli.core.exceptions import ValidationError
from indexify_cli.core.logging import get_logger

logger = get_logger(__name__)


@command
class NamespaceCreate(ServiceCommand):
    """Create a namespace from a name, a definition file, or both.

    A name given on the command line replaces the one in the file.
    """

    name: Optional[str] = None
    definition: Optional[CreateNamespace] = None

    def request(self) -> CreateNamespace:
        namespace = self.definition or CreateNamespace()
        if self.name:
            namespace = namespace.model_copy(update={"name": self.name})
        if not namespace.name:
            raise ValidationError("No namespace provided")
        return namespace

    async def run(self) -> None:
        namespace = self.request()
        logger.activity("namespace::create", name=namespace.name)

        await self.api_server.create(NAMESPACES, namespace)
        logger.info("Created namespace", name=namespace.name)


@command
class NamespaceGet(ServiceCommand):
    """Get a specific namespace."""

    name: str

    async def run(self) -> None:
        logger.activity("namespace::get", name=self.name)
        self.output.item(await self.api_server.get(NAMESPACES, self.name))


@command
class NamespaceList(ServiceCommand):
    """List all namespaces."""

    async def run(self) -> None:
        logger.activity("namespace::list")
        self.output.list(await self.api_server.list(NAMESPACES))


@selector
class NamespaceCmd(Selector):
    create: NamespaceCreate
    get: NamespaceGet
    list: NamespaceList


@command
class Namespace(Command):
    """Interact with namespaces."""

    cmd: NamespaceCmd = subcommand()
