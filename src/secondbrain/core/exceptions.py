"""
Application exceptions.

Exception Hierarchy:
    SecondBrainError (base, 500)
       ├── InvalidInputError (422)     <- schema or reference validation failure
       ├── AuthenticationError (401)   <- missing/invalid credential
       ├── UnauthorizedError (403)     <- authenticated but not the owner
       ├── NotFoundError (404)         <- absent, or a private brain link
       ├── ConflictError (409)         <- duplicate tag title / email
       └── InternalError (500)         <- unexpected store failure

Services raise these; the handlers registered in ``main`` turn them into an
``ErrorResponse`` body.
"""

from typing import Any, Optional


class SecondBrainError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dict for the API response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details or None,
        }


class InvalidInputError(SecondBrainError):
    """Input failed validation."""

    status_code = 422
    error_code = "INVALID_INPUT"
    default_message = "Invalid input"


class UnauthorizedError(SecondBrainError):
    """Principal may not act on the resource.

    The message stays generic so a non-owner learns nothing about the record.
    """

    status_code = 403
    error_code = "UNAUTHORIZED"
    default_message = "You are not allowed to modify this resource"


class AuthenticationError(UnauthorizedError):
    """Missing, malformed or expired credential."""

    status_code = 401
    default_message = "Not authorized"


class NotFoundError(SecondBrainError):
    """Resource not found.

    Example:
        raise NotFoundError("Content")
        # Message: "Content not found"
    """

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "Resource",
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or f"{resource} not found", details)


class ConflictError(SecondBrainError):
    """Resource already exists in scope."""

    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource already exists"


class InternalError(SecondBrainError):
    """Unexpected infrastructure failure."""
