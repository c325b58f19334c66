"""Extraction graph commands.

Graphs have no endpoint of their own for reading: get and list read them
from the namespace listing, which embeds each namespace's graphs.
"""

from __future__ import annotations

from typing import List

from indexify_cli.api.models import DataNamespace, ExtractionGraph
from indexify_cli.client import EXTRACTION_GRAPHS, NAMESPACES
from indexify_cli.commands.base import NamespacedCommand
from indexify_cli.core.command import Command, Selector, subcommand
from indexify_cli.core.container import command, selector
from indexify_cli.core.exceptions import NotFoundError
from indexify_cli.core.logging import get_logger

logger = get_logger(__name__)


async def namespace_graphs(cmd: NamespacedCommand) -> List[ExtractionGraph]:
    """Graphs of the command's namespace, read from the namespace listing.

    Raises:
        NotFoundError: If the namespace does not exist
    """
    namespaces: List[DataNamespace] = await cmd.api_server.list(NAMESPACES)
    for ns in namespaces:
        if ns.name == cmd.namespace:
            return ns.extraction_graphs
    raise NotFoundError(f"Namespace not found: {cmd.namespace}")


@command
class GraphCreate(NamespacedCommand):
    """Create a new graph from a definition file."""

    graph: ExtractionGraph

    async def run(self) -> None:
        logger.activity("graph::create", namespace=self.namespace)

        graph = self.graph
        if not graph.namespace:
            graph = graph.model_copy(update={"namespace": self.namespace})

        result = await self.client.create(EXTRACTION_GRAPHS, graph)
        self.output.item(result)


@command
class GraphGet(NamespacedCommand):
    """Get a graph by name."""

    name: str

    async def run(self) -> None:
        logger.activity("graph::get", namespace=self.namespace, name=self.name)

        for graph in await namespace_graphs(self):
            if graph.name == self.name:
                self.output.item(graph)
                return
        raise NotFoundError(f"Graph not found: {self.name}")


@command
class GraphList(NamespacedCommand):
    """List all the graphs in a namespace."""

    async def run(self) -> None:
        logger.activity("graph::list", namespace=self.namespace)
        self.output.list(await namespace_graphs(self))


@selector
class GraphCmd(Selector):
    create: GraphCreate
    get: GraphGet
    list: GraphList


@command
class Graph(Command):
    """Interact with extraction graphs."""

    cmd: GraphCmd = subcommand()
