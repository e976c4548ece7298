"""Error hierarchy shared by services and the HTTP layer.

Every error carries a short human-readable ``message`` and a machine ``code``.
The application factory maps them to JSON responses using ``http_status``.
"""

from __future__ import annotations


class CarbonTrackerError(Exception):
    """Base exception for all expected failures."""

    code = "INTERNAL_ERROR"
    http_status = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"message": self.message, "code": self.code}


class ValidationError(CarbonTrackerError):
    code = "MISSING_FIELD"
    http_status = 400
    default_message = "Invalid request data"


class DuplicateEmailError(CarbonTrackerError):
    code = "DUPLICATE_EMAIL"
    http_status = 400
    default_message = "Email already exists"


class AuthError(CarbonTrackerError):
    code = "UNAUTHORIZED"
    http_status = 401
    default_message = "Unauthorized"


class InvalidCredentialsError(AuthError):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class MissingTokenError(AuthError):
    code = "MISSING_TOKEN"
    default_message = "Unauthorized"


class InvalidTokenError(AuthError):
    code = "INVALID_TOKEN"
    default_message = "Invalid token"


class NotFoundError(CarbonTrackerError):
    code = "NOT_FOUND"
    http_status = 404
    default_message = "Not found"
