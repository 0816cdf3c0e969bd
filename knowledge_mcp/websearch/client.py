"""Web search provider client."""

import time

import httpx

from knowledge_mcp.config import WebSearchSettings, get_settings
from knowledge_mcp.exceptions import (
    InvalidQueryError,
    KnowledgeBaseError,
    MissingCredentialError,
    ProviderError,
)
from knowledge_mcp.logging_config import get_logger
from knowledge_mcp.observability.metrics import track_web_search_request
from knowledge_mcp.results import Failure, Success
from knowledge_mcp.websearch.models import WebSearchQuery, WebSearchResult

logger = get_logger(__name__)

_MAX_PROVIDER_MESSAGE = 500


class WebSearchClient:
    """Forwards keyword queries to the configured search provider.

    The provider receives ``{query, country, language, domain}`` as JSON
    with a bearer credential. Nothing is retried here.
    """

    def __init__(
        self,
        settings: WebSearchSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the web search client.

        Args:
            settings: Provider configuration.
            client: HTTP client (for testing).
        """
        self._settings = settings or get_settings().web_search
        self._client = client
        self._owns_client = client is None

    @property
    def has_credential(self) -> bool:
        """Whether a provider credential is configured."""
        return bool(self._settings.api_key and self._settings.api_key.get_secret_value())

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def resolve_query(
        self,
        query: str,
        country: str | None = None,
        language: str | None = None,
        domain: str | None = None,
    ) -> WebSearchQuery:
        """Fill in configured defaults for omitted (None) parameters only."""
        return WebSearchQuery(
            query=query,
            country=self._settings.default_country if country is None else country,
            language=self._settings.default_language if language is None else language,
            domain=self._settings.default_domain if domain is None else domain,
        )

    async def search_web(
        self,
        query: str,
        country: str | None = None,
        language: str | None = None,
        domain: str | None = None,
    ) -> Success[WebSearchResult] | Failure:
        """Run a web search.

        Args:
            query: Keywords to search for.
            country: Country code (default from settings).
            language: Language code (default from settings).
            domain: Search engine domain (default from settings).

        Returns:
            Success with the provider payload, or Failure with InvalidQuery,
            MissingCredential or ProviderError.
        """
        request = self.resolve_query(query, country, language, domain)
        try:
            result = await self._search_web(request)
        except KnowledgeBaseError as e:
            return Failure.from_error(e)
        return Success(value=result)

    async def _search_web(self, request: WebSearchQuery) -> WebSearchResult:
        if not request.query.strip():
            raise InvalidQueryError("Search query must not be empty")

        # Checked before any network activity
        api_key = ""
        if self._settings.api_key:
            api_key = self._settings.api_key.get_secret_value()
        if not api_key:
            raise MissingCredentialError(
                "Web search credential is not configured",
                details={"setting": "WEB_SEARCH_API_KEY"},
            )

        client = await self._get_client()
        url = self._settings.base_url
        headers = {"Authorization": f"Bearer {api_key}"}
        start_time = time.perf_counter()

        try:
            response = await client.post(
                url,
                json=request.model_dump(),
                headers=headers,
                timeout=self._settings.timeout,
            )
            response.raise_for_status()

        except httpx.TimeoutException as e:
            track_web_search_request(time.perf_counter() - start_time, success=False)
            logger.error(f"Web search request timed out: {e}")
            raise ProviderError(
                "Search provider request timed out",
                details={"timeout": self._settings.timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            track_web_search_request(time.perf_counter() - start_time, success=False)
            status = e.response.status_code
            logger.error(
                f"Web search request failed: {status}",
                extra={"url": url, "status": status},
            )
            raise ProviderError(
                f"Search provider returned {status}",
                details={
                    "status_code": status,
                    "message": _provider_message(e.response),
                },
            ) from e

        except httpx.RequestError as e:
            track_web_search_request(time.perf_counter() - start_time, success=False)
            logger.error(f"Web search connection error: {e}", extra={"url": url})
            raise ProviderError(
                f"Failed to connect to search provider: {e}",
                details={"url": url},
            ) from e

        track_web_search_request(time.perf_counter() - start_time)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Web search returned a non-JSON body", extra={"url": url})
            raise ProviderError(
                "Invalid response from search provider: body is not JSON",
                details={"status_code": response.status_code},
            ) from e

        logger.debug(
            "Web search completed",
            extra={
                "query_length": len(request.query),
                "country": request.country,
                "language": request.language,
                "domain": request.domain,
            },
        )

        return WebSearchResult(**request.model_dump(), results=data)


def _provider_message(response: httpx.Response) -> str:
    """Best-effort error message from a provider error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:_MAX_PROVIDER_MESSAGE]

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str):
                return value[:_MAX_PROVIDER_MESSAGE]
    return str(body)[:_MAX_PROVIDER_MESSAGE]
