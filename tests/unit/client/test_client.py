"""
Tests for the async HTTP client against a mocked service.

Test Strategy
-------------
- respx intercepts httpx; no network access
- Responses are unwrapped from their envelopes into models
- Non-success responses and connection failures become TransportError
- Bodies that do not match their model become DeserializationError
"""

import json

import httpx
import pytest
import respx

from indexify_cli.api.models import (
    ContentIds,
    ContentMetadata,
    CreateNamespace,
    DataNamespace,
    ExtractionGraph,
    ExtractionGraphResponse,
)
from indexify_cli.client import (
    CONTENT,
    DOWNLOAD,
    EXTRACTION_GRAPHS,
    INDEXES,
    NAMESPACES,
    UPLOAD,
)
from indexify_cli.core.exceptions import (
    DeserializationError,
    TransportError,
    ValidationError,
)

SERVICE_URL = "http://indexify.test"


@pytest.mark.asyncio
async def test_list_unwraps_envelope(client, namespaces_payload):
    with respx.mock(base_url=SERVICE_URL) as mock:
        mock.get("/namespaces").mock(
            return_value=httpx.Response(200, json=namespaces_payload)
        )

        namespaces = await client.list(NAMESPACES)

    assert [ns.name for ns in namespaces] == ["default", "research"]
    assert isinstance(namespaces[0], DataNamespace)
    assert namespaces[0].extraction_graphs[0].name == "summarize"


@pytest.mark.asyncio
async def test_list_namespaced(client):
    payload = {"indexes": [{"name": "idx", "embedding_schema": {"dim": 3}}]}
    with respx.mock(base_url=SERVICE_URL) as mock:
        route = mock.get("/namespaces/default/indexes").mock(
            return_value=httpx.Response(200, json=payload)
        )

        indexes = await client.list(INDEXES)

    assert route.called
    assert indexes[0].name == "idx"


@pytest.mark.asyncio
async def test_requests_carry_user_agent(client):
    with respx.mock(base_url=SERVICE_URL) as mock:
        route = mock.get("/namespaces").mock(
            return_value=httpx.Response(200, json={"namespaces": []})
        )
        await client.list(NAMESPACES)

    request = route.calls.last.request
    assert request.headers["User-Agent"].startswith("indexify-cli/")


@pytest.mark.asyncio
async def test_get_unwraps_envelope(client):
    payload = {"content_metadata": {"id": "c1", "name": "paper.pdf"}}
    with respx.mock(base_url=SERVICE_URL) as mock:
        mock.get("/namespaces/default/content/c1").mock(
            return_value=httpx.Response(200, json=payload)
        )

        content = await client.get(CONTENT, "c1")

    assert isinstance(content, ContentMetadata)
    assert content.name == "paper.pdf"


@pytest.mark.asyncio
async def test_create_posts_model(client):
    graph = ExtractionGraph(name="g", namespace="default")
    with respx.mock(base_url=SERVICE_URL) as mock:
        route = mock.post("/namespaces/default/extraction_graphs").mock(
            return_value=httpx.Response(200, json={"indexes": ["g.summary"]})
        )

        result = await client.create(EXTRACTION_GRAPHS, graph)

    assert isinstance(result, ExtractionGraphResponse)
    assert result.indexes == ["g.summary"]
    sent = json.loads(route.calls.last.request.content)
    assert sent["name"] == "g"
    assert sent["namespace"] == "default"


@pytest.mark.asyncio
async def test_create_namespace(client):
    with respx.mock(base_url=SERVICE_URL) as mock:
        route = mock.post("/namespaces").mock(
            return_value=httpx.Response(200, json={})
        )

        await client.create(NAMESPACES, CreateNamespace(name="research"))

    sent = json.loads(route.calls.last.request.content)
    assert sent == {"name": "research", "extraction_graphs": [], "labels": {}}


@pytest.mark.asyncio
async def test_delete_sends_body(client):
    with respx.mock(base_url=SERVICE_URL) as mock:
        route = mock.delete("/namespaces/default/content").mock(
            return_value=httpx.Response(200, json={})
        )

        await client.delete(CONTENT, ContentIds(content_ids=["c1"]))

    request = route.calls.last.request
    assert request.method == "DELETE"
    assert json.loads(request.content) == {"content_ids": ["c1"]}


@pytest.mark.asyncio
async def test_upload_multipart(client, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")

    with respx.mock(base_url=SERVICE_URL) as mock:
        route = mock.post("/namespaces/default/upload_file").mock(
            return_value=httpx.Response(200, text="ok")
        )

        body = await client.upload(UPLOAD, path, ["summarize", "embed"])

    assert body == "ok"
    request = route.calls.last.request
    assert request.url.params["extraction_graph_names"] == "summarize,embed"
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'filename="notes.txt"' in request.content
    assert b"hello" in request.content


@pytest.mark.asyncio
async def test_upload_missing_file(client, tmp_path):
    with pytest.raises(ValidationError, match="Cannot read"):
        await client.upload(UPLOAD, tmp_path / "missing.txt", ["g"])


@pytest.mark.asyncio
async def test_unsupported_operations(client):
    """Resources without an envelope reject the operation before any request."""
    with pytest.raises(ValidationError, match="does not support listing"):
        await client.list(EXTRACTION_GRAPHS)
    with pytest.raises(ValidationError, match="does not support getting by ID"):
        await client.get(INDEXES, "x")
    with pytest.raises(ValidationError, match="does not support creation"):
        await client.create(CONTENT, ContentIds(content_ids=[]))
    with pytest.raises(ValidationError, match="does not support deletion"):
        await client.delete(NAMESPACES, ContentIds(content_ids=[]))


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_error_status(self, client):
        """Status, URL and body of the failed response are kept."""
        with respx.mock(base_url=SERVICE_URL) as mock:
            mock.get("/namespaces/default/content/missing").mock(
                return_value=httpx.Response(404, text='{"errors": "not found"}')
            )

            with pytest.raises(TransportError) as exc_info:
                await client.get(CONTENT, "missing")

        error = exc_info.value
        assert error.status_code == 404
        assert error.url == f"{SERVICE_URL}/namespaces/default/content/missing"
        assert error.body == '{"errors": "not found"}'
        assert "404 Not Found" in str(error)
        assert ("Body:", '{"errors": "not found"}') in error.sections

    @pytest.mark.asyncio
    async def test_connection_failure(self, client):
        with respx.mock(base_url=SERVICE_URL) as mock:
            mock.get("/namespaces").mock(side_effect=httpx.ConnectError("refused"))

            with pytest.raises(TransportError) as exc_info:
                await client.list(NAMESPACES)

        error = exc_info.value
        assert error.status_code is None
        assert error.url == f"{SERVICE_URL}/namespaces"
        assert isinstance(error.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_body_does_not_match_model(self, client):
        body = '{"namespaces": [{"extraction_graphs": []}]}'
        with respx.mock(base_url=SERVICE_URL) as mock:
            mock.get("/namespaces").mock(return_value=httpx.Response(200, text=body))

            with pytest.raises(DeserializationError) as exc_info:
                await client.list(NAMESPACES)

        assert exc_info.value.path == "namespaces.0.name"
        assert ("Body:", body) in exc_info.value.sections


class TestStream:
    @pytest.mark.asyncio
    async def test_stream_with_length(self, client):
        with respx.mock(base_url=SERVICE_URL) as mock:
            mock.get("/namespaces/default/content/c1/download").mock(
                return_value=httpx.Response(200, content=b"0123456789")
            )

            async with client.stream(DOWNLOAD, "c1") as (size, chunks):
                data = b"".join([chunk async for chunk in chunks])

        assert size == 10
        assert data == b"0123456789"

    @pytest.mark.asyncio
    async def test_stream_error_status(self, client):
        with respx.mock(base_url=SERVICE_URL) as mock:
            mock.get("/namespaces/default/content/c1/download").mock(
                return_value=httpx.Response(500, text="boom")
            )

            with pytest.raises(TransportError) as exc_info:
                async with client.stream(DOWNLOAD, "c1"):
                    pass

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "boom"
