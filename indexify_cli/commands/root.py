"""The root of the command tree.

Root carries the global options and does process-wide setup in its pre_run
step: logging to stderr (and optionally a file) and, unless disabled,
telemetry. Every invocation is a chain starting here:

    Root -> RootCmd -> Graph -> GraphCmd -> GraphList
"""

from __future__ import annotations

import logging
from dataclasses import field
from pathlib import Path
from typing import List, Optional

from indexify_cli.cli.console import set_verbose_mode
from indexify_cli.client import Client
from indexify_cli.commands.content import Content
from indexify_cli.commands.extractor import Extractor
from indexify_cli.commands.graph import Graph
from indexify_cli.commands.index import Index
from indexify_cli.commands.namespace import Namespace
from indexify_cli.core.command import Command, Selector, subcommand
from indexify_cli.core.container import command, selector
from indexify_cli.core.logging import (
    configure_logging,
    get_logger,
    level_for_verbosity,
)
from indexify_cli.output import Format
from indexify_cli.telemetry import create_handler

logger = get_logger(__name__)


@selector
class RootCmd(Selector):
    content: Content
    extractor: Extractor
    graph: Graph
    index: Index
    namespace: Namespace


@command
class Root(Command):
    """Interact with the indexify service."""

    cmd: RootCmd = subcommand()
    api_server: Client = field(default_factory=Client)
    output: Format = Format.PRETTY
    namespace: str = "default"
    verbosity: int = 0
    telemetry: bool = True
    log_file: Optional[Path] = None

    def pre_run(self) -> None:
        handlers: List[logging.Handler] = []
        if self.telemetry:
            handler = create_handler()
            if handler is not None:
                handlers.append(handler)

        configure_logging(
            level=level_for_verbosity(self.verbosity),
            log_file=self.log_file,
            extra_handlers=handlers,
        )
        set_verbose_mode(self.verbosity > 1)

        logger.debug(
            "Configured logging",
            api_server=self.api_server.service_url,
            namespace=self.namespace,
            telemetry=bool(handlers),
        )
