"""Shared API dependencies for authentication and service construction."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from stackit.db.session import get_db
from stackit.models import User
from stackit.models.user import ROLE_ADMIN
from stackit.services.authorization import require_caller, require_role
from stackit.services.events import EventBus
from stackit.services.notification_service import NotificationService, build_event_bus
from stackit.services.vote_service import VoteService

# HTTP Bearer scheme; missing credentials are reported by our own handler.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        UnauthenticatedError: If no token was sent, it is invalid, or the user is gone
    """
    token = credentials.credentials if credentials else None
    return require_caller(db, token)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Like `get_current_user`, but anonymous callers are allowed.

    Credentials that are present but invalid are still rejected.
    """
    if credentials is None:
        return None
    return require_caller(db, credentials.credentials)


def get_admin_user(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Require the caller to hold the admin role."""
    require_role(current_user, ROLE_ADMIN)
    return current_user


def get_event_bus(db: SessionDep) -> EventBus:
    """Return a request-scoped event bus wired to the notification handlers."""
    return build_event_bus(db)


EventBusDep = Annotated[EventBus, Depends(get_event_bus)]


def get_vote_service(db: SessionDep, bus: EventBusDep) -> VoteService:
    return VoteService(db, bus)


def get_notification_service(db: SessionDep) -> NotificationService:
    return NotificationService(db)


# Type aliases for common dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
AdminUserDep = Annotated[User, Depends(get_admin_user)]
VoteServiceDep = Annotated[VoteService, Depends(get_vote_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
