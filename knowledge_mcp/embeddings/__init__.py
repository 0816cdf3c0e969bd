"""Embedding generator module."""

from knowledge_mcp.embeddings.models import EmbeddingResult
from knowledge_mcp.embeddings.service import (
    DeterministicEmbeddingService,
    EmbeddingService,
    deterministic_embedding,
)

__all__ = [
    "DeterministicEmbeddingService",
    "EmbeddingResult",
    "EmbeddingService",
    "deterministic_embedding",
]
