"""CLI core utilities package.

- error_handlers: error panels and exit codes
- runner: building the command chain from parsed arguments and running it
"""

from __future__ import annotations

from indexify_cli.cli.core.error_handlers import CLIErrorHandler
from indexify_cli.cli.core.runner import (
    get_settings,
    load_option,
    namespaced_fields,
    run_command,
    service_fields,
)

__all__ = [
    "CLIErrorHandler",
    "get_settings",
    "load_option",
    "namespaced_fields",
    "run_command",
    "service_fields",
]
