"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from qdrant_client import AsyncQdrantClient

from knowledge_mcp.api.app import app
from knowledge_mcp.config import EmbeddingSettings, QdrantSettings
from knowledge_mcp.embeddings.service import DeterministicEmbeddingService
from knowledge_mcp.vectorstore.service import QdrantVectorStore


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for the default FastAPI app.

    Yields:
        AsyncClient configured for testing.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def memory_store() -> AsyncGenerator[QdrantVectorStore, None]:
    """Vector store backed by an in-process Qdrant with a provisioned collection.

    Yields:
        QdrantVectorStore over a fresh ":memory:" collection.
    """
    qdrant = AsyncQdrantClient(location=":memory:")
    store = QdrantVectorStore(
        embedding_service=DeterministicEmbeddingService(EmbeddingSettings(dimensions=64)),
        settings=QdrantSettings(collection_name="test_knowledge"),
        client=qdrant,
    )
    await store.create_collection()
    yield store
    await qdrant.close()
