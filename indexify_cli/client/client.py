"""Async HTTP client for the indexify service.

The client is an immutable value: a service URL plus an optional active
namespace. Each call opens its own ``httpx.AsyncClient`` so the value can be
copied between commands freely.

Example:
    client = Client.parse("http://localhost:8900").with_namespace("default")
    content = await client.list(CONTENT)
"""

from __future__ import annotations

import mimetypes
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from indexify_cli import __version__
from indexify_cli.client.resources import Resource
from indexify_cli.core.exceptions import TransportError, ValidationError
from indexify_cli.core.logging import get_logger
from indexify_cli.core.serde import from_json, to_jsonable

logger = get_logger(__name__)

DEFAULT_SERVICE_URL = "http://localhost:8900"
DEFAULT_TIMEOUT_SEC = 30.0


def _raise_for_status(response: httpx.Response, body: str) -> None:
    if response.is_success:
        return
    raise TransportError(
        f"{response.status_code} {response.reason_phrase} for {response.url}",
        url=str(response.url),
        status_code=response.status_code,
        body=body,
    )


@dataclass(frozen=True)
class Client:
    """Client bound to one service URL and, optionally, one namespace."""

    service_url: str = DEFAULT_SERVICE_URL
    namespace: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT_SEC

    @classmethod
    def parse(cls, value: str) -> "Client":
        """Build a client from a URL given on the command line.

        Raises:
            ValidationError: If ``value`` is not an absolute http(s) URL
        """
        try:
            url = httpx.URL(value)
        except (httpx.InvalidURL, TypeError) as e:
            raise ValidationError(f"{value!r} is not a valid URL - {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise ValidationError(
                f"{value!r} is not a valid URL - expected http(s)://host[:port]"
            )
        return cls(service_url=str(url))

    def headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {"User-Agent": f"indexify-cli/{__version__}"}

    def with_namespace(self, namespace: str) -> "Client":
        """Return a copy scoped to ``namespace``."""
        return replace(self, namespace=namespace)

    def url(self, resource: Resource, id: Optional[str] = None) -> str:
        """Absolute URL of ``resource`` (and ``id``) on this service."""
        segments: List[str] = []
        if resource.namespaced:
            if self.namespace is None:
                raise ValidationError(
                    f"namespace is required for {resource.name}. "
                    "Call with_namespace first."
                )
            segments.extend(["namespaces", self.namespace])
        segments.extend(resource.segments(id))

        base = self.service_url.rstrip("/")
        return base + "/" + "/".join(quote(s, safe="") for s in segments)

    async def _send(self, method: str, url: str, **kwargs: Any) -> str:
        logger.debug("request", method=method, url=url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers=self.headers()
            ) as http:
                response = await http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e

        body = response.text
        _raise_for_status(response, body)
        return body

    async def list(self, resource: Resource) -> List[Any]:
        """Fetch every object of ``resource``, unwrapped from its envelope."""
        if resource.list_envelope is None:
            raise ValidationError(f"{resource.name} does not support listing.")
        envelope, field = resource.list_envelope

        body = await self._send("GET", self.url(resource))
        return getattr(from_json(envelope, body), field)

    async def get(self, resource: Resource, id: str) -> Any:
        """Fetch one object of ``resource`` by ID."""
        if resource.get_envelope is None:
            raise ValidationError(f"{resource.name} does not support getting by ID.")
        envelope, field = resource.get_envelope

        body = await self._send("GET", self.url(resource, id))
        return getattr(from_json(envelope, body), field)

    async def create(self, resource: Resource, obj: BaseModel) -> Any:
        """POST ``obj`` to the collection and decode the response."""
        if resource.create_response is None:
            raise ValidationError(f"{resource.name} does not support creation.")

        body = await self._send("POST", self.url(resource), json=to_jsonable(obj))
        return from_json(resource.create_response, body)

    async def delete(self, resource: Resource, obj: BaseModel) -> Any:
        """DELETE on the collection with ``obj`` as JSON body."""
        if resource.delete_response is None:
            raise ValidationError(f"{resource.name} does not support deletion.")

        body = await self._send("DELETE", self.url(resource), json=to_jsonable(obj))
        return from_json(resource.delete_response, body)

    async def upload(
        self, resource: Resource, path: Path, graph_names: Sequence[str]
    ) -> str:
        """Upload a file as multipart form data.

        Args:
            resource: Upload endpoint
            path: Local file to send
            graph_names: Extraction graphs the content is fed into

        Returns:
            Raw response body
        """
        mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ValidationError(f"Cannot read {path}: {e}") from e

        return await self._send(
            "POST",
            self.url(resource),
            files={"file": (path.name, data, mime)},
            params={"extraction_graph_names": ",".join(graph_names)},
        )

    @asynccontextmanager
    async def stream(
        self, resource: Resource, id: Optional[str] = None
    ) -> AsyncIterator[Tuple[Optional[int], AsyncIterator[bytes]]]:
        """Stream a response body.

        Yields:
            (content length if known, async iterator over body chunks)
        """
        url = self.url(resource, id)
        logger.debug("stream", url=url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers=self.headers()
            ) as http:
                async with http.stream("GET", url) as response:
                    if not response.is_success:
                        await response.aread()
                        _raise_for_status(response, response.text)

                    length = response.headers.get("content-length")
                    size = int(length) if length and length.isdigit() else None
                    yield size, response.aiter_bytes()
        except httpx.HTTPError as e:
            raise TransportError(f"GET {url} failed: {e}", url=url) from e
