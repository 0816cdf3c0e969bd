"""Tool dispatcher and registry."""

from knowledge_mcp.tools.dispatcher import NO_MATCHES_MESSAGE, ToolDispatcher
from knowledge_mcp.tools.models import (
    AddDocumentArguments,
    AddDocumentOutput,
    RetrieveArguments,
    RetrievedDocument,
    RetrieveOutput,
    ToolDefinition,
    WebSearchArguments,
)
from knowledge_mcp.tools.registry import ToolRegistry

__all__ = [
    "NO_MATCHES_MESSAGE",
    "AddDocumentArguments",
    "AddDocumentOutput",
    "RetrieveArguments",
    "RetrieveOutput",
    "RetrievedDocument",
    "ToolDefinition",
    "ToolDispatcher",
    "ToolRegistry",
    "WebSearchArguments",
]
