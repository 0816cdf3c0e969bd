"""Tests for observability module."""

from httpx import AsyncClient
from prometheus_client import REGISTRY

from knowledge_mcp.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    track_retrieval,
    track_tool_call,
    track_vectorstore_operation,
    track_web_search_request,
)


class TestMetricsEndpoint:
    """Tests for /metrics endpoint."""

    async def test_metrics_endpoint_returns_prometheus_format(
        self,
        client: AsyncClient,
    ) -> None:
        """Metrics endpoint returns Prometheus format."""
        await client.get("/health")
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert b"http_requests_total" in response.content


class TestMetricsFunctions:
    """Tests for metrics tracking functions."""

    def test_get_metrics_returns_bytes(self) -> None:
        """get_metrics returns bytes."""
        assert isinstance(get_metrics(), bytes)

    def test_track_tool_call(self) -> None:
        """Tool calls are counted by tool and status."""
        success_labels = {"tool": "retrieve", "status": "success"}
        error_labels = {"tool": "web_search", "status": "error"}
        success_before = REGISTRY.get_sample_value("tool_calls_total", success_labels) or 0.0
        error_before = REGISTRY.get_sample_value("tool_calls_total", error_labels) or 0.0

        track_tool_call("retrieve", 0.05, success=True)
        track_tool_call("web_search", 0.5, success=False)

        assert REGISTRY.get_sample_value("tool_calls_total", success_labels) == success_before + 1
        assert REGISTRY.get_sample_value("tool_calls_total", error_labels) == error_before + 1

    def test_track_vectorstore_operation(self) -> None:
        """Vector store operations are timed."""
        track_vectorstore_operation("search", 0.02)
        assert "vectorstore_operation_duration_seconds" in get_metrics().decode()

    def test_track_web_search_request(self) -> None:
        """Web search requests are timed."""
        track_web_search_request(1.2, success=False)
        assert "web_search_request_duration_seconds" in get_metrics().decode()

    def test_track_retrieval(self) -> None:
        """Retrieval counts and scores are recorded."""
        track_retrieval(results_returned=3, top_score=0.92)
        track_retrieval(results_returned=0, top_score=None)

        metrics = get_metrics().decode()
        assert "retrieval_results_returned" in metrics
        assert "retrieval_top_score" in metrics


class TestEndpointNormalization:
    """Tests for endpoint label normalization."""

    def test_tool_paths_grouped(self) -> None:
        """Tool invocation paths share one label."""
        middleware = MetricsMiddleware(app=lambda *_: None)
        assert middleware._normalize_endpoint("/tools/retrieve") == "/tools/{name}"
        assert middleware._normalize_endpoint("/health/ready") == "/health"
        assert middleware._normalize_endpoint("/tools") == "/tools"
