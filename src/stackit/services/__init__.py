# src/stackit/services/__init__.py
"""Business logic services for the StackIt application."""

from .errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
    UnauthenticatedError,
)
from .events import AnswerPosted, EventBus, VoteCast
from .notification_service import NotificationEmitter, NotificationService, build_event_bus
from .vote_service import VoteResult, VoteService

__all__ = [
    "AnswerPosted",
    "EventBus",
    "ForbiddenError",
    "InvalidInputError",
    "NotFoundError",
    "NotificationEmitter",
    "NotificationService",
    "ServiceError",
    "UnauthenticatedError",
    "VoteCast",
    "VoteResult",
    "VoteService",
    "build_event_bus",
]
