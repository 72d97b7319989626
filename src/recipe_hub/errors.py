"""Application error taxonomy.

Every error carries the HTTP status it maps to; the API layer turns them into
the ``{"success": false, "message": ...}`` envelope.
"""

from collections.abc import Iterable


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class Unauthenticated(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class InvalidToken(Unauthenticated):
    """Token is malformed, unsigned or carries a bad signature."""

    def __init__(self, message: str = "Invalid token", detail: str | None = None):
        super().__init__(message, detail)


class TokenExpired(Unauthenticated):
    """Token signature has expired."""

    def __init__(self, message: str = "Token expired", detail: str | None = None):
        super().__init__(message, detail)


class Forbidden(AppError):
    """Authenticated but not allowed to perform the action."""

    status_code = 403


class NotFound(AppError):
    """Requested entity does not exist."""

    status_code = 404


class ValidationError(AppError):
    """Malformed client input."""

    status_code = 400

    @classmethod
    def from_messages(cls, messages: Iterable[str]) -> "ValidationError":
        """Build a single error from field-level messages."""
        return cls("Validation error: " + ", ".join(messages))


class Conflict(AppError):
    """A unique field collided with an existing record."""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class InternalError(AppError):
    """Unexpected store or logic failure."""

    status_code = 500
