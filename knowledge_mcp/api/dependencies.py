"""Service wiring for the HTTP transport."""

from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from knowledge_mcp.config import Settings
from knowledge_mcp.embeddings.service import DeterministicEmbeddingService
from knowledge_mcp.tools.dispatcher import ToolDispatcher
from knowledge_mcp.tools.registry import ToolRegistry
from knowledge_mcp.vectorstore.service import QdrantVectorStore, VectorStore
from knowledge_mcp.websearch.client import WebSearchClient


@dataclass
class ToolServices:
    """Adapters and the tool registry built on top of them."""

    vector_store: VectorStore
    web_search: WebSearchClient
    registry: ToolRegistry

    @classmethod
    def from_settings(cls, settings: Settings) -> "ToolServices":
        """Construct every adapter from configuration."""
        vector_store = QdrantVectorStore(
            embedding_service=DeterministicEmbeddingService(settings.embedding),
            settings=settings.qdrant,
        )
        web_search = WebSearchClient(settings.web_search)
        dispatcher = ToolDispatcher(
            vector_store=vector_store,
            web_search=web_search,
            settings=settings.retrieval,
        )
        return cls(
            vector_store=vector_store,
            web_search=web_search,
            registry=ToolRegistry(dispatcher),
        )

    async def close(self) -> None:
        """Close the adapters' network clients."""
        await self.vector_store.close()
        await self.web_search.close()


def get_services(request: Request) -> ToolServices:
    """FastAPI dependency returning the configured services."""
    services: ToolServices | None = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "Tools not configured",
                "message": "The vector store and web search adapters are not initialised",
            },
        )
    return services
