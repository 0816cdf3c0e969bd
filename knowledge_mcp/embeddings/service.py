"""Embedding service interface and the deterministic default.

The default generator is a placeholder, not a semantic model: the vector is
a pure function of the text's character-code sum, expanded with a
multiplicative Lehmer generator over the Mersenne prime 2**31 - 1.
Texts with equal character-code sums (mod SEED_MODULUS) collide exactly;
stored vectors depend on that, so the sequence must not change.
"""

from abc import ABC, abstractmethod

from knowledge_mcp.config import EmbeddingSettings, get_settings
from knowledge_mcp.embeddings.models import EmbeddingResult

DEFAULT_DIMENSIONS = 1536
SEED_MODULUS = 10_000
LCG_MULTIPLIER = 48_271
LCG_MODULUS = 2**31 - 1


def text_seed(text: str) -> int:
    """Sum of the text's code points, reduced modulo SEED_MODULUS."""
    return sum(ord(char) for char in text) % SEED_MODULUS


def deterministic_embedding(
    text: str,
    dimensions: int = DEFAULT_DIMENSIONS,
) -> list[float]:
    """Map text to a fixed-length vector with components in [-1, 1].

    Args:
        text: Text to embed. May be empty.
        dimensions: Vector length.

    Returns:
        The embedding vector.
    """
    value = text_seed(text)
    vector: list[float] = []
    for _ in range(dimensions):
        value = (value * LCG_MULTIPLIER) % LCG_MODULUS
        vector.append((value / LCG_MODULUS) * 2 - 1)
    return vector


class EmbeddingService(ABC):
    """Abstract base class for embedding services.

    Defines the interface for generating text embeddings.
    """

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.
        """
        ...

    async def embed_batch(self, texts: list[str]) -> list[EmbeddingResult]:
        """Generate embeddings for multiple texts, preserving order."""
        return [await self.embed(text) for text in texts]

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the name of the embedding function."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Get the embedding dimensions."""
        ...


class DeterministicEmbeddingService(EmbeddingService):
    """Default embedding service backed by deterministic_embedding."""

    MODEL_NAME = "lcg-char-sum"

    def __init__(self, settings: EmbeddingSettings | None = None) -> None:
        self._settings = settings or get_settings().embedding

    @property
    def model_name(self) -> str:
        return self.MODEL_NAME

    @property
    def dimensions(self) -> int:
        return self._settings.dimensions

    async def embed(self, text: str) -> EmbeddingResult:
        embedding = deterministic_embedding(text, self.dimensions)
        return EmbeddingResult(
            text=text,
            embedding=embedding,
            model=self.MODEL_NAME,
            dimensions=len(embedding),
        )
