"""
Exception hierarchy for Component Studio.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ComponentStudioException(Exception):
    """Base exception for all Component Studio application errors."""

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


class InvalidRequestError(ComponentStudioException):
    """Raised when request input cannot be applied to a session."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid request error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class SessionNotFoundError(ComponentStudioException):
    """Raised when a session does not exist or is not owned by the caller."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class TranscriptConflictError(ComponentStudioException):
    """Raised when a transcript mutation targets a snapshot that is out of date."""

    def __init__(
        self,
        session_id: str,
        expected_length: int,
        actual_length: int,
    ) -> None:
        super().__init__(
            f"Transcript changed: expected {expected_length} entries, found {actual_length}",
            {
                "session_id": session_id,
                "expected_length": expected_length,
                "actual_length": actual_length,
            },
        )


class StoreError(ComponentStudioException):
    """Raised when the durable session store fails (connection, timeout, statement)."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Operation that failed (create, read, update, list)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class GenerationError(ComponentStudioException):
    """Raised when the text-generation service call fails."""

    TIMEOUT = "timeout"
    SERVICE = "service"
    MALFORMED = "malformed"

    def __init__(
        self,
        message: str,
        reason: str = SERVICE,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation error.

        Args:
            message: Underlying failure message
            reason: One of TIMEOUT, SERVICE, MALFORMED
            details: Additional context
        """
        self.reason = reason
        details = details or {}
        details["reason"] = reason
        super().__init__(message, details)
