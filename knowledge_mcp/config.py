"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class EmbeddingSettings(BaseSettings):
    """Embedding generator configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    dimensions: int = Field(
        default=1536,
        gt=0,
        description="Length of every embedding vector",
    )


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration."""

    model_config = SettingsConfigDict(env_prefix="QDRANT_")

    url: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Qdrant API key (optional for local)",
    )
    collection_name: str = Field(
        default="knowledge_base",
        description="Collection holding the knowledge base documents",
    )
    timeout: int = Field(
        default=10,
        gt=0,
        description="Request timeout in seconds",
    )


class WebSearchSettings(BaseSettings):
    """Web search provider configuration.

    The country/language/domain defaults are applied only when a caller
    omits the corresponding parameter.
    """

    model_config = SettingsConfigDict(env_prefix="WEB_SEARCH_")

    base_url: str = Field(
        default="http://localhost:8081/search",
        description="Search provider endpoint",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Bearer credential for the search provider",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    default_country: str = Field(default="us", description="Default country code")
    default_language: str = Field(default="en", description="Default language code")
    default_domain: str = Field(
        default="google.com",
        description="Default search engine domain",
    )


class RetrievalSettings(BaseSettings):
    """Knowledge base retrieval defaults."""

    model_config = SettingsConfigDict(env_prefix="RETRIEVAL_")

    default_limit: int = Field(
        default=5,
        ge=1,
        description="Results returned when the caller gives no limit",
    )
    max_limit: int = Field(
        default=50,
        ge=1,
        description="Largest limit a caller may request",
    )
    default_score_threshold: float = Field(
        default=0.7,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine score when the caller gives no threshold",
    )
    score_precision: int = Field(
        default=3,
        ge=0,
        description="Decimal places used when displaying scores",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # API settings
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
    )

    # Nested settings
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    web_search: WebSearchSettings = Field(default_factory=WebSearchSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
