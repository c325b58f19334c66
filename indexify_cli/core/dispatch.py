"""Dispatch loop for command chains.

Walks from the root command down the chain reported by ``next()``:

    pre_run -> run -> (child walk) -> post_run

pre_run and run happen top-down, post_run bottom-up once everything below a
node has succeeded. The first exception ends the walk: no later hook runs,
including post_run of the failing node and of every ancestor, and the
exception reaches the caller unchanged.
"""

from __future__ import annotations

import asyncio

from indexify_cli.core.command import Command
from indexify_cli.core.logging import get_logger

logger = get_logger(__name__)


async def execute(cmd: Command) -> None:
    """Run ``cmd`` and, recursively, the chain below it."""
    name = type(cmd).__name__

    logger.debug("pre_run", command=name)
    cmd.pre_run()

    logger.debug("run", command=name)
    await cmd.run()

    child = cmd.next()
    if child is not None:
        await execute(child)

    logger.debug("post_run", command=name)
    cmd.post_run()


def dispatch(root: Command) -> None:
    """Execute a command chain on a fresh event loop.

    This is the only place an event loop is created; cancellation comes from
    outside (e.g. KeyboardInterrupt) and aborts the whole walk.
    """
    asyncio.run(execute(root))
