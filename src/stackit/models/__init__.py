# src/stackit/models/__init__.py
"""SQLAlchemy models for the StackIt application."""

from .answer import Answer
from .notification import Notification
from .question import Question
from .user import User
from .vote import Vote

__all__ = [
    "Answer",
    "Notification",
    "Question",
    "User",
    "Vote",
]
