"""Tool argument and output models.

Argument models double as the published input schemas of the tools.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from knowledge_mcp.vectorstore.models import DocumentMetadata


class RetrieveArguments(BaseModel):
    """Arguments of the ``retrieve`` tool."""

    model_config = ConfigDict(extra="forbid")

    query: str = Field(description="Text to look up in the knowledge base")
    limit: int | None = Field(
        default=None,
        description="Maximum number of documents to return",
    )
    score_threshold: float | None = Field(
        default=None,
        description="Minimum cosine similarity (-1 to 1) a document must reach",
    )


class AddDocumentArguments(BaseModel):
    """Arguments of the ``add_document`` tool."""

    model_config = ConfigDict(extra="forbid")

    text: str = Field(description="Document text to store")
    category: str | None = Field(default=None, description="Document category")
    source: str | None = Field(default=None, description="Where the text came from")
    tags: list[str] | None = Field(default=None, description="Ordered tags")


class WebSearchArguments(BaseModel):
    """Arguments of the ``web_search`` tool."""

    model_config = ConfigDict(extra="forbid")

    query: str = Field(description="Keywords to search the web for")
    country: str | None = Field(default=None, description='Country code (default "us")')
    language: str | None = Field(default=None, description='Language code (default "en")')
    domain: str | None = Field(
        default=None,
        description='Search engine domain (default "google.com")',
    )


class RetrievedDocument(BaseModel):
    """A knowledge base match, with its score rounded for display."""

    id: str = Field(description="Document identifier")
    score: float = Field(description="Rounded similarity score")
    text: str = Field(description="Document text")
    metadata: DocumentMetadata = Field(description="Document metadata")


class RetrieveOutput(BaseModel):
    """Payload of a successful ``retrieve``."""

    query: str = Field(description="The query that was run")
    count: int = Field(description="Number of documents returned")
    results: list[RetrievedDocument] = Field(description="Matches, best first")
    message: str = Field(description="Human-readable summary")


class AddDocumentOutput(BaseModel):
    """Payload of a successful ``add_document``."""

    id: str = Field(description="Identifier assigned to the document")
    message: str = Field(description="Human-readable summary")


class ToolDefinition(BaseModel):
    """Published description of a tool."""

    name: str = Field(description="Tool name")
    description: str = Field(description="What the tool does")
    input_schema: dict[str, Any] = Field(description="JSON schema of the arguments")
