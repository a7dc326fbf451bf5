"""
Exception hierarchy for the RAG chat backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagChatException(Exception):
    """Base exception for all RAG chat application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RagChatException):
    """Raised when caller input is malformed. Never retried."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class ServiceInitializingError(RagChatException):
    """Raised when the RAG pipeline is not ready yet. Callers should retry later."""

    def __init__(
        self,
        message: str = "Service initializing, try again shortly",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class QuotaOrRateLimitError(RagChatException):
    """Raised when the model provider rejects a call for quota or rate limiting."""

    def __init__(
        self,
        message: str = "Model provider quota or rate limit exceeded.",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize quota/rate-limit error.

        Args:
            message: Error message
            status_code: Status code reported by the provider, if any
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class InternalServiceError(RagChatException):
    """Raised for any other failure. Detail stays in server logs."""

    def __init__(
        self,
        message: str = "An internal error occurred while processing your request.",
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class VectorStoreError(RagChatException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (load, create, add, save)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class PipelineInitializationError(RagChatException):
    """Raised when the vector store or QA chain cannot be constructed."""

    pass
