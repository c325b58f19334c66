"""HTTP client for the indexify service."""

from indexify_cli.client.client import DEFAULT_SERVICE_URL, Client
from indexify_cli.client.resources import (
    CONTENT,
    DOWNLOAD,
    EXTRACTION_GRAPHS,
    EXTRACTORS,
    INDEXES,
    NAMESPACES,
    UPLOAD,
    Resource,
)

__all__ = [
    "DEFAULT_SERVICE_URL",
    "Client",
    "Resource",
    "CONTENT",
    "DOWNLOAD",
    "EXTRACTION_GRAPHS",
    "EXTRACTORS",
    "INDEXES",
    "NAMESPACES",
    "UPLOAD",
]
