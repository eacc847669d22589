"""
Error taxonomy shared by services and the HTTP layer.

Each error carries the HTTP status it maps to. ``details`` holds raw
upstream error text and is only rendered when debug mode is on.
"""

from typing import Optional


class FoxieError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(FoxieError):
    """A required field is missing or malformed."""

    status_code = 400


class NotFoundError(FoxieError):
    """Session, message, user or file does not exist."""

    status_code = 404


class UnauthorizedError(FoxieError):
    """Caller does not own the target resource.

    Reported as 404 so that callers cannot probe for other users' data.
    """

    status_code = 404


class UpstreamUnavailableError(FoxieError):
    """Document store, blob store or completion API call failed."""

    status_code = 502
