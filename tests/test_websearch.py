"""Tests for the web search client."""

import json
from collections.abc import Callable
from unittest.mock import AsyncMock

import httpx
from pydantic import SecretStr

from knowledge_mcp.config import WebSearchSettings
from knowledge_mcp.exceptions import ErrorKind
from knowledge_mcp.results import Failure, Success
from knowledge_mcp.websearch.client import WebSearchClient

Handler = Callable[[httpx.Request], httpx.Response]


def _settings(api_key: str | None = "test-token") -> WebSearchSettings:
    return WebSearchSettings(
        base_url="http://search.test/search",
        api_key=SecretStr(api_key) if api_key is not None else None,
    )


def _client(handler: Handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestResolveQuery:
    """Tests for default parameter handling."""

    def test_defaults_for_omitted_parameters(self) -> None:
        """Omitted parameters take the configured defaults."""
        request = WebSearchClient(settings=_settings()).resolve_query("python")
        assert request.country == "us"
        assert request.language == "en"
        assert request.domain == "google.com"

    def test_explicit_values_kept(self) -> None:
        """Explicit values, including empty strings, are forwarded as given."""
        request = WebSearchClient(settings=_settings()).resolve_query(
            "python", country="de", language="", domain="bing.com"
        )
        assert request.country == "de"
        assert request.language == ""
        assert request.domain == "bing.com"


class TestWebSearchClient:
    """Tests for WebSearchClient.search_web."""

    async def test_search_success(self) -> None:
        """Provider payload is returned verbatim with the echoed query."""
        seen: list[httpx.Request] = []
        payload = {"organic": [{"title": "Python", "link": "https://python.org"}]}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=payload)

        client = WebSearchClient(settings=_settings(), client=_client(handler))
        result = await client.search_web("python", country="gb")

        assert isinstance(result, Success)
        assert result.value.query == "python"
        assert result.value.results == payload

        (request,) = seen
        assert str(request.url) == "http://search.test/search"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert json.loads(request.content) == {
            "query": "python",
            "country": "gb",
            "language": "en",
            "domain": "google.com",
        }

    async def test_missing_credential(self) -> None:
        """No credential fails fast without a network call."""
        http_client = AsyncMock(spec=httpx.AsyncClient)
        client = WebSearchClient(settings=_settings(api_key=None), client=http_client)

        assert client.has_credential is False
        result = await client.search_web("python")

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.MISSING_CREDENTIAL
        http_client.post.assert_not_called()

    async def test_empty_credential_counts_as_missing(self) -> None:
        """An empty credential string is treated as absent."""
        http_client = AsyncMock(spec=httpx.AsyncClient)
        client = WebSearchClient(settings=_settings(api_key=""), client=http_client)

        result = await client.search_web("python")

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.MISSING_CREDENTIAL
        http_client.post.assert_not_called()

    async def test_empty_query(self) -> None:
        """Blank query is rejected."""
        http_client = AsyncMock(spec=httpx.AsyncClient)
        client = WebSearchClient(settings=_settings(), client=http_client)

        result = await client.search_web("  ")

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.INVALID_QUERY
        http_client.post.assert_not_called()

    async def test_http_error(self) -> None:
        """Non-2xx carries the provider status and message."""

        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "invalid token"})

        client = WebSearchClient(settings=_settings(), client=_client(handler))
        result = await client.search_web("python")

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.PROVIDER_ERROR
        assert result.error.details == {"status_code": 401, "message": "invalid token"}

    async def test_http_error_plain_text(self) -> None:
        """Plain-text error bodies are used as the message."""

        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="service unavailable")

        client = WebSearchClient(settings=_settings(), client=_client(handler))
        result = await client.search_web("python")

        assert isinstance(result, Failure)
        assert result.error.details["message"] == "service unavailable"

    async def test_timeout(self) -> None:
        """Timeouts map to ProviderError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = WebSearchClient(settings=_settings(), client=_client(handler))
        result = await client.search_web("python")

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.PROVIDER_ERROR
        assert "timed out" in result.error.message

    async def test_connection_error(self) -> None:
        """Connection failures map to ProviderError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = WebSearchClient(settings=_settings(), client=_client(handler))
        result = await client.search_web("python")

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.PROVIDER_ERROR

    async def test_non_json_response(self) -> None:
        """A 200 with a non-JSON body is a malformed response."""

        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        client = WebSearchClient(settings=_settings(), client=_client(handler))
        result = await client.search_web("python")

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.PROVIDER_ERROR

    async def test_close(self) -> None:
        """Client closes the HTTP client it owns."""
        http_client = AsyncMock(spec=httpx.AsyncClient)
        client = WebSearchClient(settings=_settings(), client=http_client)
        client._owns_client = True

        await client.close()

        http_client.aclose.assert_called_once()
