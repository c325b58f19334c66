"""Fields shared by leaf commands.

Every leaf receives the global ``--api-server`` and ``--output`` values when
it is built; leaves working inside a namespace also receive ``--namespace``.
These bases are plain frozen dataclasses, not commands of their own: the
leaves deriving from them are decorated with ``@command``.
"""

from __future__ import annotations

from dataclasses import dataclass

from indexify_cli.client import Client
from indexify_cli.core.command import Command
from indexify_cli.output import Format


@dataclass(frozen=True)
class ServiceCommand(Command):
    """A leaf talking to the service."""

    api_server: Client
    output: Format


@dataclass(frozen=True)
class NamespacedCommand(ServiceCommand):
    """A leaf working on resources inside one namespace."""

    namespace: str

    @property
    def client(self) -> Client:
        """The service client scoped to ``namespace``."""
        return self.api_server.with_namespace(self.namespace)
