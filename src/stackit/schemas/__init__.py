# src/stackit/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .answer import AnswerCreate, AnswerResponse, AnswerUpdate
from .notification import NotificationResponse
from .question import AcceptAnswerRequest, QuestionCreate, QuestionResponse, QuestionUpdate
from .user import LoginRequest, LoginResponse, RoleUpdate, UserCreate, UserResponse
from .vote import BulkVoteRequest, VoteCreate, VoteResponse, VoteTarget

__all__ = [
    "AnswerCreate", "AnswerResponse", "AnswerUpdate",
    "NotificationResponse",
    "AcceptAnswerRequest", "QuestionCreate", "QuestionResponse", "QuestionUpdate",
    "LoginRequest", "LoginResponse", "RoleUpdate", "UserCreate", "UserResponse",
    "BulkVoteRequest", "VoteCreate", "VoteResponse", "VoteTarget",
]
