"""Domain error hierarchy shared by services and the HTTP layer."""
from __future__ import annotations


class AppError(Exception):
    """Base error carrying a client-safe message and an HTTP-equivalent status."""

    status_code = 500
    default_message = "Something went wrong. Please try again later."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):  # Malformed or out-of-range input
    status_code = 400
    default_message = "Invalid request."


class AuthError(AppError):  # Missing, invalid or expired credential
    status_code = 401
    default_message = "Authentication required."


class ForbiddenError(AppError):  # Authenticated but not allowed
    status_code = 403
    default_message = "Forbidden."


class NotFoundError(AppError):  # Missing resource or hidden ownership mismatch
    status_code = 404
    default_message = "Not found."


class ConflictError(AppError):  # Uniqueness violation
    status_code = 409
    default_message = "Resource already exists."


class ParseError(AppError):
    """The provider answered, but the content could not be used."""

    status_code = 500
    default_message = "AI returned an unusable response."


class ProviderError(AppError):
    """The provider is unconfigured or could not be reached."""

    status_code = 503
    default_message = "AI features are not configured."


__all__ = [
    "AppError",
    "ValidationError",
    "AuthError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ParseError",
    "ProviderError",
]
