"""Tool dispatcher.

Translates tool invocations into adapter calls. Every outcome, including
unexpected faults, comes back as a Success or Failure envelope.
"""

import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TypeVar
from uuid import uuid4

from knowledge_mcp.config import RetrievalSettings, get_settings
from knowledge_mcp.exceptions import (
    ErrorKind,
    InvalidDocumentError,
    InvalidQueryError,
    KnowledgeBaseError,
)
from knowledge_mcp.logging_config import get_logger
from knowledge_mcp.observability.metrics import track_retrieval, track_tool_call
from knowledge_mcp.results import ErrorInfo, Failure, Success
from knowledge_mcp.tools.models import AddDocumentOutput, RetrievedDocument, RetrieveOutput
from knowledge_mcp.vectorstore.models import DocumentMetadata
from knowledge_mcp.vectorstore.service import VectorStore
from knowledge_mcp.websearch.client import WebSearchClient
from knowledge_mcp.websearch.models import WebSearchResult

logger = get_logger(__name__)

T = TypeVar("T")

NO_MATCHES_MESSAGE = (
    "No documents in the knowledge base matched the query above the score threshold."
)


def _new_document_id() -> str:
    return str(uuid4())


class ToolDispatcher:
    """Entry point for the retrieve, add_document and web_search tools.

    Holds no state of its own beyond the injected adapters.
    """

    def __init__(
        self,
        vector_store: VectorStore,
        web_search: WebSearchClient,
        settings: RetrievalSettings | None = None,
        id_factory: Callable[[], str] = _new_document_id,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            vector_store: Knowledge base store.
            web_search: Web search provider client.
            settings: Retrieval defaults and limits.
            id_factory: Produces ids for new documents.
        """
        self._vector_store = vector_store
        self._web_search = web_search
        self._settings = settings or get_settings().retrieval
        self._id_factory = id_factory

    async def retrieve(
        self,
        query: str,
        limit: int | None = None,
        score_threshold: float | None = None,
    ) -> Success[RetrieveOutput] | Failure:
        """Look up documents similar to the query.

        Args:
            query: Query text.
            limit: Maximum results (default from settings).
            score_threshold: Minimum similarity (default from settings).

        Returns:
            Success with the formatted matches (possibly none), or Failure.
        """
        return await self._run("retrieve", self._retrieve(query, limit, score_threshold))

    async def add_document(
        self,
        text: str,
        category: str | None = None,
        source: str | None = None,
        tags: list[str] | None = None,
    ) -> Success[AddDocumentOutput] | Failure:
        """Store a new document and return its assigned id."""
        return await self._run(
            "add_document",
            self._add_document(text, category, source, tags),
        )

    async def web_search(
        self,
        query: str,
        country: str | None = None,
        language: str | None = None,
        domain: str | None = None,
    ) -> Success[WebSearchResult] | Failure:
        """Search the web; the provider payload is returned verbatim."""
        return await self._run(
            "web_search",
            self._search_web(query, country, language, domain),
        )

    async def _run(
        self,
        tool: str,
        operation: Awaitable[Success[T] | Failure],
    ) -> Success[T] | Failure:
        start_time = time.perf_counter()

        try:
            outcome = await operation
        except KnowledgeBaseError as e:
            outcome = Failure.from_error(e)
        except Exception as e:
            logger.exception(f"Tool {tool} failed unexpectedly")
            outcome = Failure(
                error=ErrorInfo(
                    kind=ErrorKind.INTERNAL,
                    message=f"Unexpected error in {tool}: {e}",
                )
            )

        track_tool_call(tool, time.perf_counter() - start_time, success=outcome.ok)

        if isinstance(outcome, Failure):
            logger.warning(
                f"Tool {tool} failed: {outcome.error.message}",
                extra={"tool": tool, "kind": outcome.kind.value},
            )
        return outcome

    async def _retrieve(
        self,
        query: str,
        limit: int | None,
        score_threshold: float | None,
    ) -> Success[RetrieveOutput] | Failure:
        if not query.strip():
            raise InvalidQueryError("Query must not be empty")

        if limit is None:
            limit = self._settings.default_limit
        if score_threshold is None:
            score_threshold = self._settings.default_score_threshold

        if not 1 <= limit <= self._settings.max_limit:
            raise InvalidQueryError(
                f"Limit must be between 1 and {self._settings.max_limit}",
                details={"limit": limit},
            )
        if not -1.0 <= score_threshold <= 1.0:
            raise InvalidQueryError(
                "Score threshold must be between -1 and 1",
                details={"score_threshold": score_threshold},
            )

        outcome = await self._vector_store.search(
            query,
            limit=limit,
            score_threshold=score_threshold,
        )
        if isinstance(outcome, Failure):
            return outcome

        matches = outcome.value
        track_retrieval(len(matches), matches[0].score if matches else None)

        precision = self._settings.score_precision
        documents = [
            RetrievedDocument(
                id=match.id,
                score=round(match.score, precision),
                text=match.text,
                metadata=match.metadata,
            )
            for match in matches
        ]

        if documents:
            message = f"Found {len(documents)} matching document(s)."
        else:
            message = NO_MATCHES_MESSAGE

        return Success(
            value=RetrieveOutput(
                query=query,
                count=len(documents),
                results=documents,
                message=message,
            )
        )

    async def _add_document(
        self,
        text: str,
        category: str | None,
        source: str | None,
        tags: list[str] | None,
    ) -> Success[AddDocumentOutput] | Failure:
        if not text.strip():
            raise InvalidDocumentError("Document text must not be empty")

        tags = list(tags or [])
        if any(not tag.strip() for tag in tags):
            raise InvalidDocumentError(
                "Tags must not be blank",
                details={"tags": tags},
            )

        metadata = DocumentMetadata(
            category=category,
            source=source,
            tags=tags,
            created_at=datetime.now(UTC),
        )
        document_id = self._id_factory()

        outcome = await self._vector_store.upsert(document_id, text, metadata)
        if isinstance(outcome, Failure):
            return outcome

        logger.info(
            "Added document",
            extra={"id": outcome.value.id, "text_length": len(text)},
        )
        return Success(
            value=AddDocumentOutput(
                id=outcome.value.id,
                message=f"Document added with id {outcome.value.id}.",
            )
        )

    async def _search_web(
        self,
        query: str,
        country: str | None,
        language: str | None,
        domain: str | None,
    ) -> Success[WebSearchResult] | Failure:
        if not query.strip():
            raise InvalidQueryError("Search query must not be empty")

        return await self._web_search.search_web(
            query,
            country=country,
            language=language,
            domain=domain,
        )
