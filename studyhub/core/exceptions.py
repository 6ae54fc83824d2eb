"""
Exception hierarchy for the StudyHub application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any

GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."


class StudyHubException(Exception):
    """Base exception for all StudyHub application errors."""

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


class ValidationError(StudyHubException):
    """Raised when input validation fails."""

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


class ExternalServiceError(StudyHubException):
    """Raised when the completion service or another remote call fails."""

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize external service error.

        Args:
            message: Error message
            service: Name of the failing service
            details: Additional context
        """
        details = details or {}
        if service:
            details["service"] = service
        super().__init__(message, details)


class ContentParseError(StudyHubException):
    """Raised when an AI reply cannot be parsed as structured JSON."""

    pass


class ChatSessionNotFoundError(StudyHubException):
    """Raised when a chat session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize chat session not found error.

        Args:
            session_id: ID of the missing chat session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Chat session not found: {session_id}", details)


class SessionExpiredError(StudyHubException):
    """Raised when a user whose session timed out issues a request."""

    def __init__(self, user_id: str) -> None:
        super().__init__("Session expired", {"user_id": user_id})


def create_safe_error(
    message: str,
    code: str | None = None,
    is_development: bool = False,
) -> dict[str, str]:
    """
    Build a user-facing error payload that does not leak internals.

    Args:
        message: Raw error message
        code: Machine-readable error code
        is_development: Expose the raw message when True

    Returns:
        dict: {"message": ..., "code": ...}
    """
    return {
        "message": message if is_development else GENERIC_ERROR_MESSAGE,
        "code": code or "GENERIC_ERROR",
    }
