"""Global settings resolved from command-line options and the environment.

Precedence (highest first):
    1. Command-line options (--api-server, --namespace, ...)
    2. Environment variables (INDEXIFY_API_SERVER, INDEXIFY_NAMESPACE, ...)
    3. Defaults below

typer does the option/environment resolution; the result is collected into
a Settings value stored on the click context so every leaf command can read
it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from indexify_cli.client import DEFAULT_SERVICE_URL, Client
from indexify_cli.core.logging import LOG_ENV_VAR
from indexify_cli.output import Format

API_SERVER_ENV_VAR = "INDEXIFY_API_SERVER"
NAMESPACE_ENV_VAR = "INDEXIFY_NAMESPACE"
TELEMETRY_ENV_VAR = "INDEXIFY_TELEMETRY"

DEFAULT_NAMESPACE = "default"

__all__ = [
    "API_SERVER_ENV_VAR",
    "LOG_ENV_VAR",
    "NAMESPACE_ENV_VAR",
    "TELEMETRY_ENV_VAR",
    "Settings",
]


@dataclass(frozen=True)
class Settings:
    """Values of the global options for one invocation."""

    api_server: Client = Client(DEFAULT_SERVICE_URL)
    output: Format = Format.PRETTY
    namespace: str = DEFAULT_NAMESPACE
    verbosity: int = 0
    telemetry: bool = True
    log_file: Optional[Path] = None