"""Vector store interface and Qdrant implementation."""

import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import ValidationError
from qdrant_client import AsyncQdrantClient
from qdrant_client.http.exceptions import UnexpectedResponse
from qdrant_client.models import Distance, PointStruct, ScoredPoint, VectorParams

from knowledge_mcp.config import QdrantSettings, get_settings
from knowledge_mcp.embeddings.service import EmbeddingService
from knowledge_mcp.exceptions import (
    CollectionNotFoundError,
    InvalidDocumentError,
    InvalidQueryError,
    KnowledgeBaseError,
    StoreUnavailableError,
)
from knowledge_mcp.logging_config import get_logger
from knowledge_mcp.observability.metrics import track_vectorstore_operation
from knowledge_mcp.results import Failure, Success
from knowledge_mcp.vectorstore.models import DocumentMetadata, SearchResult, UpsertResult

logger = get_logger(__name__)

T = TypeVar("T")


def point_id(document_id: str) -> int | str:
    """Convert a document id to a Qdrant point id.

    Qdrant only accepts unsigned integers and UUIDs.

    Raises:
        InvalidDocumentError: If the id is neither.
    """
    if document_id.isascii() and document_id.isdigit():
        return int(document_id)
    try:
        return str(uuid.UUID(document_id))
    except ValueError as e:
        raise InvalidDocumentError(
            "Document id must be a UUID or an unsigned integer",
            details={"id": document_id},
        ) from e


class VectorStore(ABC):
    """Abstract base class for the knowledge base vector store.

    Every operation returns a Success or a Failure; none raise.
    """

    @abstractmethod
    async def upsert(
        self,
        document_id: str,
        text: str,
        metadata: DocumentMetadata | None = None,
    ) -> Success[UpsertResult] | Failure:
        """Embed text and create or overwrite the point with this id.

        Args:
            document_id: Point identifier.
            text: Document text (must not be blank).
            metadata: Document metadata.

        Returns:
            Success with the id, or Failure with InvalidDocument,
            StoreUnavailable or CollectionNotFound.
        """
        ...

    @abstractmethod
    async def search(
        self,
        query_text: str,
        limit: int = 5,
        score_threshold: float = 0.0,
    ) -> Success[list[SearchResult]] | Failure:
        """Find stored documents similar to the query text.

        Args:
            query_text: Text to search for (must not be blank).
            limit: Maximum results to return.
            score_threshold: Minimum similarity score to include.

        Returns:
            Success with results ordered by descending score (possibly
            empty), or Failure with InvalidQuery, StoreUnavailable or
            CollectionNotFound.
        """
        ...

    @abstractmethod
    async def collection_exists(self) -> Success[bool] | Failure:
        """Check whether the configured collection exists."""
        ...

    async def close(self) -> None:
        """Release network resources held by the store."""
        return None


class QdrantVectorStore(VectorStore):
    """Qdrant vector store bound to a single collection."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        settings: QdrantSettings | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize Qdrant vector store.

        Args:
            embedding_service: Produces vectors for documents and queries.
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._embedding_service = embedding_service
        self._settings = settings or get_settings().qdrant
        self._client = client
        self._owns_client = client is None

    @property
    def collection_name(self) -> str:
        return self._settings.collection_name

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            api_key = None
            if self._settings.api_key:
                api_key = self._settings.api_key.get_secret_value()

            self._client = AsyncQdrantClient(
                url=self._settings.url,
                api_key=api_key,
                timeout=self._settings.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def _execute(
        self,
        operation: str,
        request: Callable[[AsyncQdrantClient], Awaitable[T]],
    ) -> T:
        """Run one Qdrant request, mapping failures to typed errors."""
        collection = self.collection_name
        start_time = time.perf_counter()

        try:
            client = await self._get_client()
            result = await request(client)

        except UnexpectedResponse as e:
            track_vectorstore_operation(
                operation, time.perf_counter() - start_time, success=False
            )
            logger.error(
                f"Qdrant {operation} returned {e.status_code}",
                extra={"collection": collection, "status": e.status_code},
            )
            if e.status_code == 404:
                raise CollectionNotFoundError(
                    f"Collection not found: {collection}",
                    details={"collection": collection},
                ) from e
            raise StoreUnavailableError(
                f"Vector store rejected {operation} with status {e.status_code}",
                details={"collection": collection, "status_code": e.status_code},
            ) from e

        except Exception as e:
            track_vectorstore_operation(
                operation, time.perf_counter() - start_time, success=False
            )
            logger.error(
                f"Qdrant {operation} failed: {e}",
                extra={"collection": collection},
            )
            raise StoreUnavailableError(
                f"Vector store {operation} failed: {e}",
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation(operation, time.perf_counter() - start_time)
        return result

    async def upsert(
        self,
        document_id: str,
        text: str,
        metadata: DocumentMetadata | None = None,
    ) -> Success[UpsertResult] | Failure:
        """Upsert one document into the collection."""
        try:
            await self._upsert(document_id, text, metadata or DocumentMetadata())
        except KnowledgeBaseError as e:
            return Failure.from_error(e)
        return Success(value=UpsertResult(id=document_id))

    async def _upsert(
        self,
        document_id: str,
        text: str,
        metadata: DocumentMetadata,
    ) -> None:
        if not document_id:
            raise InvalidDocumentError("Document id must not be empty")
        if not text.strip():
            raise InvalidDocumentError(
                "Document text must not be empty",
                details={"id": document_id},
            )

        qdrant_id = point_id(document_id)
        embedding = await self._embedding_service.embed(text)
        point = PointStruct(
            id=qdrant_id,
            vector=embedding.embedding,
            payload={
                "text": text,
                "metadata": metadata.model_dump(mode="json"),
            },
        )

        # wait=True: the call returns only once the point is fully applied
        await self._execute(
            "upsert",
            lambda client: client.upsert(
                collection_name=self.collection_name,
                points=[point],
                wait=True,
            ),
        )

        logger.debug(
            "Upserted document",
            extra={
                "collection": self.collection_name,
                "id": document_id,
                "text_length": len(text),
            },
        )

    async def search(
        self,
        query_text: str,
        limit: int = 5,
        score_threshold: float = 0.0,
    ) -> Success[list[SearchResult]] | Failure:
        """Search the collection for documents similar to query_text."""
        try:
            results = await self._search(query_text, limit, score_threshold)
        except KnowledgeBaseError as e:
            return Failure.from_error(e)
        return Success(value=results)

    async def _search(
        self,
        query_text: str,
        limit: int,
        score_threshold: float,
    ) -> list[SearchResult]:
        if not query_text.strip():
            raise InvalidQueryError("Query text must not be empty")
        if limit < 1:
            raise InvalidQueryError(
                "Limit must be at least 1",
                details={"limit": limit},
            )

        embedding = await self._embedding_service.embed(query_text)

        response = await self._execute(
            "search",
            lambda client: client.query_points(
                collection_name=self.collection_name,
                query=embedding.embedding,
                limit=limit,
                score_threshold=score_threshold,
                with_payload=True,
            ),
        )

        results = [
            self._to_search_result(point)
            for point in response.points
            if point.score is not None and point.score >= score_threshold
        ]
        results.sort(key=lambda result: result.score, reverse=True)
        results = results[:limit]

        logger.debug(
            f"Found {len(results)} documents",
            extra={
                "collection": self.collection_name,
                "query_length": len(query_text),
                "limit": limit,
                "score_threshold": score_threshold,
            },
        )
        return results

    @staticmethod
    def _to_search_result(point: ScoredPoint) -> SearchResult:
        payload: dict[str, Any] = dict(point.payload) if point.payload else {}
        text = payload.get("text")

        # Points written by other tools may carry foreign metadata
        try:
            metadata = DocumentMetadata.model_validate(payload.get("metadata") or {})
        except ValidationError as e:
            logger.warning(
                "Ignoring malformed metadata on stored point",
                extra={"id": str(point.id), "error_count": e.error_count()},
            )
            metadata = DocumentMetadata()

        return SearchResult(
            id=str(point.id),
            score=point.score,
            text=text if isinstance(text, str) else "",
            metadata=metadata,
        )

    async def collection_exists(self) -> Success[bool] | Failure:
        """Check if the configured collection exists."""
        try:
            exists = await self._execute(
                "collection_exists",
                lambda client: client.collection_exists(self.collection_name),
            )
        except KnowledgeBaseError as e:
            return Failure.from_error(e)
        return Success(value=exists)

    async def create_collection(
        self,
        dimensions: int | None = None,
    ) -> Success[bool] | Failure:
        """Provision the collection with cosine distance.

        Only used by operator tooling; upsert and search never create it.

        Args:
            dimensions: Vector size (default: the embedding dimensions).

        Returns:
            Success(True) if created, Success(False) if it already existed.
        """
        size = dimensions or self._embedding_service.dimensions
        try:
            exists = await self._execute(
                "collection_exists",
                lambda client: client.collection_exists(self.collection_name),
            )
            if exists:
                logger.info(f"Collection already exists: {self.collection_name}")
                return Success(value=False)

            await self._execute(
                "create_collection",
                lambda client: client.create_collection(
                    collection_name=self.collection_name,
                    vectors_config=VectorParams(size=size, distance=Distance.COSINE),
                ),
            )
        except KnowledgeBaseError as e:
            return Failure.from_error(e)

        logger.info(
            f"Created collection: {self.collection_name}",
            extra={"dimensions": size},
        )
        return Success(value=True)
