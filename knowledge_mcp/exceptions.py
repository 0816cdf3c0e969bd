"""Knowledge base exception hierarchy.

All custom exceptions inherit from KnowledgeBaseError and carry an
ErrorKind. Adapters raise them internally and hand them to callers as
Failure values (see knowledge_mcp.results).
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Discriminant for every failure a tool can report."""

    INVALID_DOCUMENT = "InvalidDocument"
    INVALID_QUERY = "InvalidQuery"
    STORE_UNAVAILABLE = "StoreUnavailable"
    COLLECTION_NOT_FOUND = "CollectionNotFound"
    MISSING_CREDENTIAL = "MissingCredential"
    PROVIDER_ERROR = "ProviderError"
    INTERNAL = "Internal"


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge base errors.

    Attributes:
        message: Human-readable error message.
        kind: Error kind.
        details: Additional error context.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidDocumentError(KnowledgeBaseError):
    """Document text is empty or its metadata is malformed."""

    kind = ErrorKind.INVALID_DOCUMENT


class InvalidQueryError(KnowledgeBaseError):
    """Query text is empty or a query parameter is out of range."""

    kind = ErrorKind.INVALID_QUERY


class StoreUnavailableError(KnowledgeBaseError):
    """Vector database unreachable, timed out, or rejected the request."""

    kind = ErrorKind.STORE_UNAVAILABLE


class CollectionNotFoundError(KnowledgeBaseError):
    """The configured collection does not exist."""

    kind = ErrorKind.COLLECTION_NOT_FOUND


class MissingCredentialError(KnowledgeBaseError):
    """Search provider credential is not configured."""

    kind = ErrorKind.MISSING_CREDENTIAL


class ProviderError(KnowledgeBaseError):
    """Search provider failed or returned a malformed response."""

    kind = ErrorKind.PROVIDER_ERROR
