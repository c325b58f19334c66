"""
Shared pytest fixtures and configuration for indexify-cli tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **isolated_env**: (autouse) no telemetry key, telemetry off, no log override
- **reset_logging**: (autouse) removes handlers installed by a test
- **client**: Client pointed at a fake service, scoped to "default"
- **write_file**: Helper writing definition files into tmp_path
- **namespaces_payload**: A namespace listing as returned by the service
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Generator

import pytest

from indexify_cli.cli.console import set_verbose_mode
from indexify_cli.client import Client
from indexify_cli.core.logging import LogConfig, _ConfigHolder

SERVICE_URL = "http://indexify.test"


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the real environment's settings."""
    for var in (
        "POSTHOG_API_KEY",
        "POSTHOG_HOST",
        "INDEXIFY_LOG",
        "INDEXIFY_API_SERVER",
        "INDEXIFY_NAMESPACE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("INDEXIFY_TELEMETRY", "false")


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Remove handlers installed by configure_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    _ConfigHolder.replace(LogConfig(), [])
    root.setLevel(level)
    set_verbose_mode(False)


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def client() -> Client:
    """Client for the fake service, scoped to the default namespace."""
    return Client(SERVICE_URL).with_namespace("default")


@pytest.fixture
def namespaces_payload() -> Dict[str, Any]:
    """GET /namespaces response with one graph in "default"."""
    return {
        "namespaces": [
            {
                "name": "default",
                "extraction_graphs": [
                    {
                        "id": "g1",
                        "name": "summarize",
                        "namespace": "default",
                        "description": "Summaries",
                        "extraction_policies": [
                            {
                                "id": "p1",
                                "extractor": "tensorlake/summarize",
                                "name": "summary",
                                "graph_name": "summarize",
                                "content_source": "ingestion",
                            }
                        ],
                    }
                ],
            },
            {"name": "research", "extraction_graphs": []},
        ]
    }


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``content`` to ``tmp_path / name`` and return the path.

    Example:
        def test_load(write_file):
            path = write_file("graph.yaml", "name: g")
    """

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line(
        "markers", "cli: marks tests that drive the typer application"
    )
    config.addinivalue_line(
        "markers", "requires_api: marks tests that require a running service"
    )
