"""Vector store data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentMetadata(BaseModel):
    """Metadata stored alongside a document's text.

    Attributes:
        category: Optional free-form category.
        source: Where the document came from (URL, file, "web_search", ...).
        tags: Ordered tags.
        created_at: When the document was added.
    """

    model_config = ConfigDict(extra="ignore")

    category: str | None = Field(default=None, description="Document category")
    source: str | None = Field(default=None, description="Document source")
    tags: list[str] = Field(default_factory=list, description="Ordered tags")
    created_at: datetime | None = Field(default=None, description="Insertion time")


class UpsertResult(BaseModel):
    """Identifier of a point written to the collection."""

    id: str = Field(description="Document identifier")


class SearchResult(BaseModel):
    """Result from a vector similarity search.

    Attributes:
        id: Document identifier.
        score: Cosine similarity (higher is more similar).
        text: Stored document text.
        metadata: Stored document metadata.
    """

    id: str = Field(description="Document identifier")
    score: float = Field(description="Similarity score")
    text: str = Field(default="", description="Document text")
    metadata: DocumentMetadata = Field(
        default_factory=DocumentMetadata,
        description="Document metadata",
    )
