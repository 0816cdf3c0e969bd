"""Observability module for metrics and monitoring."""

from knowledge_mcp.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
    track_retrieval,
    track_tool_call,
    track_vectorstore_operation,
    track_web_search_request,
)

__all__ = [
    "MetricsMiddleware",
    "get_metrics",
    "get_metrics_content_type",
    "track_retrieval",
    "track_tool_call",
    "track_vectorstore_operation",
    "track_web_search_request",
]
