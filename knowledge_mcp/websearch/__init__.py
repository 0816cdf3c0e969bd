"""Web search provider module."""

from knowledge_mcp.websearch.client import WebSearchClient
from knowledge_mcp.websearch.models import WebSearchQuery, WebSearchResult

__all__ = [
    "WebSearchClient",
    "WebSearchQuery",
    "WebSearchResult",
]
