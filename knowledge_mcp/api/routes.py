"""API routes exposing the knowledge base tools."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from knowledge_mcp.api.dependencies import ToolServices, get_services
from knowledge_mcp.logging_config import get_logger
from knowledge_mcp.tools.models import ToolDefinition

logger = get_logger(__name__)


router = APIRouter(prefix="/tools", tags=["Tools"])

Services = Annotated[ToolServices, Depends(get_services)]


@router.get("", response_model=list[ToolDefinition])
async def list_tools(services: Services) -> list[ToolDefinition]:
    """List the available tools and their input schemas."""
    return services.registry.definitions()


@router.post("/{name}")
async def invoke_tool(
    name: str,
    services: Services,
    arguments: Annotated[dict[str, Any], Body(default_factory=dict)],
) -> JSONResponse:
    """Invoke a tool.

    Known tools always answer 200 with a success or failure envelope;
    the ``status`` field tells them apart.
    """
    if name not in services.registry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Unknown tool", "tool": name},
        )

    outcome = await services.registry.invoke(name, arguments)
    logger.info(
        f"Tool {name} completed",
        extra={"tool": name, "status": outcome.status},
    )
    return JSONResponse(content=outcome.model_dump(mode="json"))
