"""Domain errors raised by the service layer.

Services raise these at the point of detection and never retry; the
application registers a single handler that renders them as JSON with the
matching HTTP status code.
"""

from __future__ import annotations

from fastapi import status


class ChirpError(Exception):
    """Base class for all domain failures surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    kind: str = "error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ChirpError):
    """Referenced entity is absent or not visible to the caller.

    Visibility failures use this error as well so a private account's
    content is never confirmed to exist.
    """

    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class ForbiddenError(ChirpError):
    """Entity is visible but the caller lacks the ownership right required."""

    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"


class ConflictError(ChirpError):
    """Action is invalid given the entity's current state."""

    status_code = status.HTTP_409_CONFLICT
    kind = "conflict"


class ValidationError(ChirpError):
    """Malformed input rejected before any store access."""

    status_code = 422
    kind = "validation"


class StorageError(ChirpError):
    """The object-storage collaborator failed to issue a URL."""

    status_code = status.HTTP_502_BAD_GATEWAY
    kind = "storage"


__all__ = [
    "ChirpError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
