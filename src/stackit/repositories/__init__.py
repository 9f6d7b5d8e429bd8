"""Repositories wrapping SQLAlchemy access for the service layer."""

from .notification_repo import NotificationRepository
from .vote_repo import TargetRef, VoteRepository

__all__ = ["NotificationRepository", "TargetRef", "VoteRepository"]
