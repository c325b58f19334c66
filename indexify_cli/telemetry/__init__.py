"""Anonymous usage and error telemetry."""

from __future__ import annotations

import os
from typing import Optional

from indexify_cli.telemetry.handler import (
    Event,
    Provider,
    TelemetryHandler,
    anonymous_id,
    machine_id,
)
from indexify_cli.telemetry.posthog import Posthog

API_KEY_ENV_VAR = "POSTHOG_API_KEY"
HOST_ENV_VAR = "POSTHOG_HOST"


def create_handler(api_key: Optional[str] = None) -> Optional[TelemetryHandler]:
    """Build the telemetry handler, or None when no API key is configured."""
    api_key = api_key or os.environ.get(API_KEY_ENV_VAR)
    if not api_key:
        return None

    host = os.environ.get(HOST_ENV_VAR)
    provider = Posthog(api_key, host) if host else Posthog(api_key)
    return TelemetryHandler(provider)


__all__ = [
    "Event",
    "Posthog",
    "Provider",
    "TelemetryHandler",
    "anonymous_id",
    "create_handler",
    "machine_id",
]
