"""Caller resolution, role checks and ownership checks."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from stackit.core.security import decode_access_token
from stackit.models import Answer, Question, User
from stackit.repositories.vote_repo import target_model
from stackit.services.errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)

__all__ = [
    "can_modify",
    "ensure_can_modify",
    "require_caller",
    "require_role",
    "resolve_caller",
]

logger = logging.getLogger(__name__)


def resolve_caller(db: Session, token: str | None) -> User | None:
    """Return the user identified by a bearer token, or None if it does not resolve."""
    if not token:
        return None
    user_id = decode_access_token(token)
    if user_id is None:
        return None
    return db.get(User, user_id)


def require_caller(db: Session, token: str | None) -> User:
    """Resolve the caller or fail with `UnauthenticatedError`."""
    if not token:
        logger.warning("Authentication failed: missing credentials")
        raise UnauthenticatedError("Authentication required")
    user = resolve_caller(db, token)
    if user is None:
        logger.warning("Authentication failed: invalid credentials")
        raise UnauthenticatedError("Could not validate credentials")
    return user


def require_role(user: User, *roles: str) -> None:
    """Fail with `ForbiddenError` unless ``user`` holds one of ``roles``."""
    if user.role not in roles:
        logger.warning(
            "Authorization failed: role %s not in %s (user=%s)",
            user.role,
            roles,
            user.username,
        )
        raise ForbiddenError(f"Access denied. Required role: {' or '.join(roles)}")


def can_modify(user: User, owner_id: int) -> bool:
    """Admins may modify anything; everyone else only what they own."""
    return user.is_admin or user.id == owner_id


def ensure_can_modify(
    db: Session,
    user: User,
    resource_type: str,
    resource_id: int,
) -> Question | Answer:
    """Load a question or answer the caller is allowed to update or delete.

    Raises:
        InvalidInputError: If ``resource_type`` is not a question or answer.
        NotFoundError: If the resource does not exist.
        ForbiddenError: If the caller is neither the owner nor an admin.
    """
    try:
        model = target_model(resource_type)
    except ValueError as err:
        raise InvalidInputError("Invalid resource type") from err

    resource = db.get(model, resource_id)
    if resource is None:
        raise NotFoundError(f"{resource_type} not found")
    if not can_modify(user, resource.user_id):
        logger.warning(
            "Ownership check failed (user=%s, %s=%s)", user.id, resource_type, resource_id
        )
        raise ForbiddenError("Access denied. You can only modify your own content.")
    return resource
