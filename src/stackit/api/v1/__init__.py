"""Version 1 API endpoints."""

from .endpoints import (
    answers_router,
    auth_router,
    notifications_router,
    questions_router,
    users_router,
    votes_router,
)

__all__ = [
    "auth_router",
    "users_router",
    "questions_router",
    "answers_router",
    "votes_router",
    "notifications_router",
]
