"""Vector store module."""

from knowledge_mcp.vectorstore.models import DocumentMetadata, SearchResult, UpsertResult
from knowledge_mcp.vectorstore.service import QdrantVectorStore, VectorStore

__all__ = [
    "DocumentMetadata",
    "QdrantVectorStore",
    "SearchResult",
    "UpsertResult",
    "VectorStore",
]
