"""Telemetry capture through the logging system.

TelemetryHandler is a logging handler installed by the root command. It picks
two kinds of records out of the normal log stream:

- activities: records carrying an ``activity`` field
  (``logger.activity("content::download")``)
- errors: records at ERROR level or above, or carrying exception info

Each one becomes an Event keyed by an anonymous identifier derived from the
machine id, and is handed to a provider (PostHog) on a background thread.
Capture is best effort: failures are logged as warnings and never reach the
command being run.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from indexify_cli.core.logging import ACTIVITY_FIELD, get_logger

logger = get_logger(__name__)

#: Package name used to key the anonymous id and to name events
NAME = "indexify"

_MACHINE_ID_PATHS = (Path("/etc/machine-id"), Path("/var/lib/dbus/machine-id"))

# Records from these loggers would feed back into capture
_IGNORED_LOGGERS = ("httpx", "httpcore", __name__)


def machine_id() -> str:
    """Stable identifier of this machine, or "unknown"."""
    for path in _MACHINE_ID_PATHS:
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if value:
            return value

    node = uuid.getnode()
    # getnode() sets the multicast bit when it had to make up a random value
    if not (node >> 40) & 1:
        return f"{node:012x}"
    return "unknown"


def anonymous_id(mid: Optional[str] = None) -> str:
    """UUID-formatted HMAC-SHA256 of the machine id, keyed by the package name.

    The machine id itself never leaves the machine.
    """
    mid = machine_id() if mid is None else mid
    tag = hmac.new(NAME.encode(), mid.encode(), hashlib.sha256).digest()
    return str(uuid.UUID(bytes=tag[:16]))


@dataclass
class Event:
    """A telemetry event ready to be sent."""

    name: str
    user_id: str
    properties: Dict[str, Any] = field(default_factory=dict)


class Provider(Protocol):
    """Backend turning log records into events and delivering them."""

    def on_activity(self, user_id: str, record: logging.LogRecord) -> Event: ...

    def on_error(self, user_id: str, record: logging.LogRecord) -> Event: ...

    def capture(self, event: Event) -> None: ...


def record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Structured fields attached by StructuredLogger, if any."""
    fields = getattr(record, "fields", None)
    return dict(fields) if isinstance(fields, dict) else {}


class TelemetryHandler(logging.Handler):
    """Logging handler forwarding activities and errors to a provider."""

    def __init__(
        self,
        provider: Provider,
        *,
        user_id: Optional[str] = None,
        emit_activity: bool = True,
        emit_errors: bool = True,
    ) -> None:
        super().__init__(level=logging.INFO)
        self.provider = provider
        self.user_id = user_id or anonymous_id()
        self.emit_activity = emit_activity
        self.emit_errors = emit_errors
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="telemetry"
        )
        self._closed = False

    def is_activity(self, record: logging.LogRecord) -> bool:
        return self.emit_activity and ACTIVITY_FIELD in record_fields(record)

    def is_error(self, record: logging.LogRecord) -> bool:
        return self.emit_errors and (
            record.levelno >= logging.ERROR
            or bool(record.exc_info)
            or "error" in record_fields(record)
        )

    def emit(self, record: logging.LogRecord) -> None:
        if self._closed or record.name.startswith(_IGNORED_LOGGERS):
            return

        try:
            if self.is_activity(record):
                event = self.provider.on_activity(self.user_id, record)
            elif self.is_error(record):
                event = self.provider.on_error(self.user_id, record)
            else:
                return

            self._executor.submit(self._capture, event)
        except Exception:
            self.handleError(record)

    def _capture(self, event: Event) -> None:
        try:
            self.provider.capture(event)
        except Exception as e:
            logger.warning("Failed to capture telemetry event", reason=repr(e))

    def flush(self) -> None:
        """Wait for queued events to be delivered."""
        if self._closed:
            return
        self._executor.submit(lambda: None).result()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=True)
        super().close()
