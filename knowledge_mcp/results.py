"""Tagged result envelope returned by adapters and tools.

Every operation returns either ``Success[T]`` or ``Failure``; the
``status`` field is the discriminant callers switch on.
"""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from knowledge_mcp.exceptions import ErrorKind, KnowledgeBaseError

T = TypeVar("T")


class Success(BaseModel, Generic[T]):
    """Successful outcome carrying a payload."""

    status: Literal["success"] = "success"
    value: T = Field(description="Operation payload")

    @property
    def ok(self) -> bool:
        return True


class ErrorInfo(BaseModel):
    """Typed description of a failure.

    Attributes:
        kind: Error kind discriminant.
        message: Human-readable message.
        details: Additional context (status codes, offending fields).
    """

    kind: ErrorKind = Field(description="Error kind")
    message: str = Field(description="Human-readable message")
    details: dict[str, Any] = Field(default_factory=dict, description="Error context")


class Failure(BaseModel):
    """Failed outcome carrying a typed error."""

    status: Literal["failure"] = "failure"
    error: ErrorInfo = Field(description="What went wrong")

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @classmethod
    def from_error(cls, error: KnowledgeBaseError) -> "Failure":
        """Build a Failure from a knowledge base exception."""
        return cls(
            error=ErrorInfo(
                kind=error.kind,
                message=error.message,
                details=error.details,
            )
        )
