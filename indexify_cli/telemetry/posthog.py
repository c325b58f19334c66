"""PostHog telemetry provider.

Events are sent to PostHog's public capture endpoint with httpx. Activity
events are named ``indexify::activity`` and carry the activity as
``$screen_name``; error events are named ``indexify::event``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

import httpx

from indexify_cli import __version__
from indexify_cli.core.logging import ACTIVITY_FIELD
from indexify_cli.telemetry.handler import NAME, Event, record_fields

DEFAULT_HOST = "https://us.i.posthog.com"
CAPTURE_TIMEOUT_SEC = 5.0

ON_ACTIVITY = "activity"
ON_EVENT = "event"


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


class Posthog:
    """Provider delivering events to a PostHog project."""

    def __init__(self, api_key: str, host: str = DEFAULT_HOST) -> None:
        self.api_key = api_key
        self.host = host.rstrip("/")
        self.on_activity_name = f"{NAME}::{ON_ACTIVITY}"
        self.on_error_name = f"{NAME}::{ON_EVENT}"

    def props(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Event properties for a log record."""
        fields = record_fields(record)
        props: Dict[str, Any] = {
            "name": record.funcName,
            "$lib": "telemetry/python",
            "level": record.levelname.lower(),
            "module": record.name,
            "version": __version__,
        }

        if ACTIVITY_FIELD in fields:
            props["$screen_name"] = fields[ACTIVITY_FIELD]

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            props["error"] = str(exc)
            props["error_type"] = type(exc).__name__

        props.update({k: _jsonable(v) for k, v in fields.items()})
        return props

    def on_activity(self, user_id: str, record: logging.LogRecord) -> Event:
        return Event(self.on_activity_name, user_id, self.props(record))

    def on_error(self, user_id: str, record: logging.LogRecord) -> Event:
        return Event(self.on_error_name, user_id, self.props(record))

    def capture(self, event: Event) -> None:
        """Send one event.

        Raises:
            httpx.HTTPError: If the request fails or is rejected
        """
        response = httpx.post(
            f"{self.host}/capture/",
            json={
                "api_key": self.api_key,
                "event": event.name,
                "distinct_id": event.user_id,
                "properties": event.properties,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            timeout=CAPTURE_TIMEOUT_SEC,
        )
        response.raise_for_status()
