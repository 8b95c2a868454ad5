"""
Error taxonomy.

Every failure a client can observe is one of these. Each carries a
machine-readable ``kind`` and the HTTP status the API answers with.
"""

from __future__ import annotations


class ClubError(Exception):
    """Base class for all application errors."""

    kind: str = "internal_error"
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "kind": self.kind}


class ValidationError(ClubError):
    """Malformed or missing input."""

    kind = "validation_error"
    status_code = 400
    default_message = "Invalid input"


class AuthenticationRequired(ClubError):
    """Missing, invalid or expired credentials."""

    kind = "authentication_required"
    status_code = 401
    default_message = "Authentication required"


class Forbidden(ClubError):
    """Authenticated, but not allowed."""

    kind = "forbidden"
    status_code = 403
    default_message = "Forbidden"


class NotFound(ClubError):
    """Referenced entity does not exist."""

    kind = "not_found"
    status_code = 404
    default_message = "Not found"


class Conflict(ClubError):
    """Request clashes with current state (duplicates, illegal transitions)."""

    kind = "conflict"
    status_code = 409
    default_message = "Conflict"


class DuplicateEmail(Conflict):
    """Email already registered. Answered with 400 like the signup form expects."""

    status_code = 400
    default_message = "Email already registered"


class InternalError(ClubError):
    """Unexpected failure, usually from the store."""


class ConfigurationError(Exception):
    """Raised at startup when settings are unusable."""
