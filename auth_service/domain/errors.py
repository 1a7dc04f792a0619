"""Error taxonomy for the signup and login workflows.

Every error carries a generic, client-safe ``message`` and the HTTP status it
maps to. Underlying causes are chained with ``raise ... from`` and logged
server-side; they never reach the response body.
"""

from __future__ import annotations


class AuthServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthServiceError):
    """A required field is missing or empty."""

    status_code = 400
    default_message = "All fields are required"


class ConflictError(AuthServiceError):
    """An account with the same email already exists."""

    status_code = 409
    default_message = "Email already exists"


class AuthenticationError(AuthServiceError):
    """Unknown identifier or wrong password; the two are indistinguishable."""

    status_code = 401
    default_message = "Invalid credentials"


class InternalError(AuthServiceError):
    """Store or hashing failure."""

    status_code = 500
    default_message = "Server error"
