"""Expected, user-facing failures raised by the service layer.

Each error carries a ``kind`` that the API layer maps to an HTTP status.
Storage failures are not represented here; they propagate as
``SQLAlchemyError`` and are reported as internal errors.
"""

from __future__ import annotations

__all__ = [
    "ServiceError",
    "InvalidInputError",
    "NotFoundError",
    "ForbiddenError",
    "UnauthenticatedError",
]


class ServiceError(Exception):
    """Base class for expected service failures."""

    kind = "service_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ServiceError):
    """An enum value or identifier supplied by the caller is not acceptable."""

    kind = "invalid_input"


class NotFoundError(ServiceError):
    """The referenced entity does not exist."""

    kind = "not_found"


class ForbiddenError(ServiceError):
    """The caller is known but may not perform the operation."""

    kind = "forbidden"


class UnauthenticatedError(ServiceError):
    """No caller identity could be resolved from the supplied credentials."""

    kind = "unauthenticated"
