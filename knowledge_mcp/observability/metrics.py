"""Prometheus metrics for the knowledge base tools.

Provides metrics instrumentation for:
- HTTP request latency and counts
- Tool invocation outcomes and latency
- Vector store operation latency
- Web search provider latency
- Retrieval result counts and top scores
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

# HTTP Request Metrics
HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

HTTP_REQUEST_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

# Tool Metrics
TOOL_CALL_DURATION = Histogram(
    "tool_call_duration_seconds",
    "Tool invocation duration in seconds",
    ["tool", "status"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

TOOL_CALL_TOTAL = Counter(
    "tool_calls_total",
    "Total tool invocations",
    ["tool", "status"],
)

# Vector Store Metrics
VECTORSTORE_OPERATION_DURATION = Histogram(
    "vectorstore_operation_duration_seconds",
    "Vector store operation duration",
    ["operation", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

# Web Search Metrics
WEB_SEARCH_REQUEST_DURATION = Histogram(
    "web_search_request_duration_seconds",
    "Web search provider request duration",
    ["status"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Retrieval Metrics
RETRIEVAL_RESULTS_RETURNED = Histogram(
    "retrieval_results_returned",
    "Number of documents returned per retrieval",
    buckets=[0, 1, 2, 3, 5, 10, 20, 50],
)

RETRIEVAL_TOP_SCORE = Histogram(
    "retrieval_top_score",
    "Top retrieval score per query",
    buckets=[0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0],
)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process request and collect metrics."""
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        labels = {
            "method": request.method,
            "endpoint": self._normalize_endpoint(request.url.path),
            "status_code": response.status_code,
        }
        HTTP_REQUEST_DURATION.labels(**labels).observe(duration)
        HTTP_REQUEST_TOTAL.labels(**labels).inc()

        return response

    def _normalize_endpoint(self, path: str) -> str:
        """Normalize endpoint path to reduce cardinality."""
        if path.startswith("/health"):
            return "/health"
        # Tool names are a closed set, but unknown names must not add series
        if path.startswith("/tools/"):
            return "/tools/{name}"
        return path


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST


def _status(success: bool) -> str:
    return "success" if success else "error"


def track_tool_call(tool: str, duration: float, success: bool = True) -> None:
    """Track a tool invocation.

    Args:
        tool: Tool name.
        duration: Invocation duration in seconds.
        success: Whether the tool returned a success envelope.
    """
    status = _status(success)
    TOOL_CALL_DURATION.labels(tool=tool, status=status).observe(duration)
    TOOL_CALL_TOTAL.labels(tool=tool, status=status).inc()


def track_vectorstore_operation(
    operation: str,
    duration: float,
    success: bool = True,
) -> None:
    """Track a vector store round trip."""
    VECTORSTORE_OPERATION_DURATION.labels(
        operation=operation,
        status=_status(success),
    ).observe(duration)


def track_web_search_request(duration: float, success: bool = True) -> None:
    """Track a web search provider round trip."""
    WEB_SEARCH_REQUEST_DURATION.labels(status=_status(success)).observe(duration)


def track_retrieval(results_returned: int, top_score: float | None) -> None:
    """Track retrieval metrics.

    Args:
        results_returned: Number of documents returned.
        top_score: Highest score, or None when nothing matched.
    """
    RETRIEVAL_RESULTS_RETURNED.observe(results_returned)
    if top_score is not None:
        RETRIEVAL_TOP_SCORE.observe(top_score)
