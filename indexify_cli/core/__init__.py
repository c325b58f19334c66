"""Core building blocks: command model, dispatch loop, errors and logging.

Usage:
    from indexify_cli.core import Command, Selector, command, selector
    from indexify_cli.core import subcommand, dispatch

Settings and file loading live in ``indexify_cli.core.config`` and
``indexify_cli.core.files``; they depend on the API models and are not
imported here.
"""

from __future__ import annotations

from indexify_cli.core.command import Command, Selector, subcommand
from indexify_cli.core.container import command, selector
from indexify_cli.core.dispatch import dispatch, execute
from indexify_cli.core.exceptions import (
    CommandDefinitionError,
    DeserializationError,
    IndexifyError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from indexify_cli.core.logging import configure_logging, get_logger

__all__ = [
    # Command model
    "Command",
    "Selector",
    "command",
    "selector",
    "subcommand",
    # Dispatch
    "dispatch",
    "execute",
    # Errors
    "CommandDefinitionError",
    "DeserializationError",
    "IndexifyError",
    "NotFoundError",
    "TransportError",
    "ValidationError",
    # Logging
    "configure_logging",
    "get_logger",
]
