"""Named, schema-validated tools backed by a ToolDispatcher."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from knowledge_mcp.exceptions import ErrorKind
from knowledge_mcp.results import ErrorInfo, Failure, Success
from knowledge_mcp.tools.dispatcher import ToolDispatcher
from knowledge_mcp.tools.models import (
    AddDocumentArguments,
    RetrieveArguments,
    ToolDefinition,
    WebSearchArguments,
)

ToolHandler = Callable[[Any], Awaitable[Success[Any] | Failure]]


@dataclass(frozen=True)
class _Tool:
    name: str
    description: str
    arguments: type[BaseModel]
    # Kind reported when the arguments fail validation
    invalid_kind: ErrorKind
    handler: ToolHandler


class ToolRegistry:
    """The three knowledge base tools, addressable by name."""

    def __init__(self, dispatcher: ToolDispatcher) -> None:
        tools = [
            _Tool(
                name="retrieve",
                description=(
                    "Semantic lookup in the knowledge base. Returns stored "
                    "documents whose similarity to the query reaches the score "
                    "threshold, best match first."
                ),
                arguments=RetrieveArguments,
                invalid_kind=ErrorKind.INVALID_QUERY,
                handler=lambda args: dispatcher.retrieve(
                    args.query,
                    limit=args.limit,
                    score_threshold=args.score_threshold,
                ),
            ),
            _Tool(
                name="add_document",
                description=(
                    "Add a document to the knowledge base with optional "
                    "category, source and tags. Returns the assigned id."
                ),
                arguments=AddDocumentArguments,
                invalid_kind=ErrorKind.INVALID_DOCUMENT,
                handler=lambda args: dispatcher.add_document(
                    args.text,
                    category=args.category,
                    source=args.source,
                    tags=args.tags,
                ),
            ),
            _Tool(
                name="web_search",
                description=(
                    "Search the web for fresh information. Results are returned "
                    "as-is; use add_document to keep anything worth storing."
                ),
                arguments=WebSearchArguments,
                invalid_kind=ErrorKind.INVALID_QUERY,
                handler=lambda args: dispatcher.web_search(
                    args.query,
                    country=args.country,
                    language=args.language,
                    domain=args.domain,
                ),
            ),
        ]
        self._tools = {tool.name: tool for tool in tools}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def definitions(self) -> list[ToolDefinition]:
        """Describe every tool with its JSON input schema."""
        return [
            ToolDefinition(
                name=tool.name,
                description=tool.description,
                input_schema=tool.arguments.model_json_schema(),
            )
            for tool in self._tools.values()
        ]

    async def invoke(
        self,
        name: str,
        arguments: dict[str, Any],
    ) -> Success[Any] | Failure:
        """Validate arguments and run the named tool.

        Args:
            name: Tool name.
            arguments: Raw JSON arguments.

        Returns:
            The tool's envelope, or a Failure when validation fails.

        Raises:
            KeyError: If no tool has this name.
        """
        tool = self._tools[name]

        try:
            args = tool.arguments.model_validate(arguments)
        except ValidationError as e:
            return Failure(
                error=ErrorInfo(
                    kind=tool.invalid_kind,
                    message=f"Invalid arguments for {name}",
                    details={
                        "errors": e.errors(include_url=False, include_context=False)
                    },
                )
            )

        return await tool.handler(args)
