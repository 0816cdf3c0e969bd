"""FastAPI application entry point.

Configures the application with logging, metrics, the tool routes and
health checks.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response

from knowledge_mcp import __version__
from knowledge_mcp.api.dependencies import ToolServices
from knowledge_mcp.api.routes import router
from knowledge_mcp.config import get_settings
from knowledge_mcp.logging_config import get_logger, setup_logging
from knowledge_mcp.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)
from knowledge_mcp.results import Failure

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the adapters from settings unless services were injected, and
    closes the ones it built on shutdown.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level)
    logger.info(
        "Starting knowledge tools server",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
            "collection": settings.qdrant.collection_name,
        },
    )

    owned: ToolServices | None = None
    if getattr(app.state, "services", None) is None:
        owned = ToolServices.from_settings(settings)
        app.state.services = owned

    yield

    if owned is not None:
        await owned.close()
        app.state.services = None
    logger.info("Shutting down knowledge tools server")


def create_app(services: ToolServices | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        services: Pre-built services (for testing). Built at startup if omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Knowledge Tools",
        description="Knowledge base retrieval, document insertion and web search tools",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.services = services

    app.add_middleware(MetricsMiddleware)

    app.include_router(router)
    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route(
        "/metrics",
        metrics_endpoint,
        methods=["GET"],
        tags=["Observability"],
        include_in_schema=False,
    )

    return app


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint.

    Returns:
        Health status with version and timestamp.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check(request: Request) -> dict[str, Any]:
    """Readiness probe.

    Ready once the collection exists. A missing web search credential is
    reported but does not block the knowledge base tools.

    Returns:
        Readiness status with component checks.
    """
    checks: dict[str, str] = {"config": "ok"}
    services: ToolServices | None = getattr(request.app.state, "services", None)

    if services is None:
        checks["vector_store"] = "not_configured"
        checks["web_search"] = "not_configured"
    else:
        outcome = await services.vector_store.collection_exists()
        if isinstance(outcome, Failure):
            checks["vector_store"] = outcome.kind.value
        else:
            checks["vector_store"] = "ok" if outcome.value else "collection_missing"

        checks["web_search"] = (
            "ok" if services.web_search.has_credential else "missing_credential"
        )

    ready = checks["config"] == "ok" and checks["vector_store"] == "ok"

    return {
        "status": "ready" if ready else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def liveness_check() -> dict[str, str]:
    """Liveness probe.

    Returns:
        Liveness status.
    """
    return {"status": "alive"}


async def metrics_endpoint() -> Response:
    """Expose Prometheus metrics."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


# Create the application instance
app = create_app()
