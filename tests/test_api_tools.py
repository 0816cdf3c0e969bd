"""Tests for the tool API routes."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from knowledge_mcp.api.app import create_app
from knowledge_mcp.api.dependencies import ToolServices
from knowledge_mcp.config import RetrievalSettings, WebSearchSettings
from knowledge_mcp.results import Success
from knowledge_mcp.tools.dispatcher import ToolDispatcher
from knowledge_mcp.tools.registry import ToolRegistry
from knowledge_mcp.vectorstore.models import SearchResult, UpsertResult
from knowledge_mcp.vectorstore.service import VectorStore
from knowledge_mcp.websearch.client import WebSearchClient


def _services() -> ToolServices:
    store = AsyncMock(spec=VectorStore)
    store.search.return_value = Success(
        value=[SearchResult(id="a", score=0.91234, text="rivers of europe")]
    )
    store.upsert.return_value = Success(value=UpsertResult(id="doc-1"))
    store.collection_exists.return_value = Success(value=True)

    web_search = WebSearchClient(settings=WebSearchSettings(api_key=None))
    dispatcher = ToolDispatcher(
        vector_store=store,
        web_search=web_search,
        settings=RetrievalSettings(),
        id_factory=lambda: "doc-1",
    )
    return ToolServices(
        vector_store=store,
        web_search=web_search,
        registry=ToolRegistry(dispatcher),
    )


@pytest.fixture
async def tools_client() -> AsyncGenerator[AsyncClient, None]:
    """Client for an app with injected services."""
    transport = ASGITransport(app=create_app(services=_services()))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestListTools:
    """Tests for GET /tools."""

    async def test_lists_three_tools(self, tools_client: AsyncClient) -> None:
        """All tools are listed with schemas."""
        response = await tools_client.get("/tools")

        assert response.status_code == 200
        data = response.json()
        assert [tool["name"] for tool in data] == ["retrieve", "add_document", "web_search"]
        assert "properties" in data[0]["input_schema"]

    async def test_not_configured(self, client: AsyncClient) -> None:
        """Without services the tools are unavailable."""
        response = await client.get("/tools")

        assert response.status_code == 503
        assert "not configured" in response.json()["detail"]["error"]


class TestInvokeTool:
    """Tests for POST /tools/{name}."""

    async def test_retrieve(self, tools_client: AsyncClient) -> None:
        """retrieve returns a success envelope with rounded scores."""
        response = await tools_client.post("/tools/retrieve", json={"query": "rivers"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["value"]["count"] == 1
        assert data["value"]["results"][0]["score"] == 0.912

    async def test_retrieve_empty_query(self, tools_client: AsyncClient) -> None:
        """Invalid input comes back as a failure envelope."""
        response = await tools_client.post("/tools/retrieve", json={"query": ""})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "failure"
        assert data["error"]["kind"] == "InvalidQuery"

    async def test_add_document(self, tools_client: AsyncClient) -> None:
        """add_document returns the assigned id."""
        response = await tools_client.post(
            "/tools/add_document",
            json={"text": "rivers of europe", "category": "geo"},
        )

        data = response.json()
        assert data["status"] == "success"
        assert data["value"]["id"] == "doc-1"

    async def test_add_document_missing_text(self, tools_client: AsyncClient) -> None:
        """Missing text is an invalid document."""
        response = await tools_client.post("/tools/add_document", json={})

        data = response.json()
        assert data["status"] == "failure"
        assert data["error"]["kind"] == "InvalidDocument"

    async def test_web_search_missing_credential(self, tools_client: AsyncClient) -> None:
        """web_search without a credential fails with MissingCredential."""
        response = await tools_client.post("/tools/web_search", json={"query": "python"})

        data = response.json()
        assert data["status"] == "failure"
        assert data["error"]["kind"] == "MissingCredential"

    async def test_unknown_tool(self, tools_client: AsyncClient) -> None:
        """Unknown tool names are 404."""
        response = await tools_client.post("/tools/drop_collection", json={})

        assert response.status_code == 404
