"""CRUD-style helpers for managing users."""
from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stackit.core import security
from stackit.models import Answer, Question, Vote
from stackit.models.user import ROLE_USER, ROLES, User
from stackit.schemas.user import UserCreate
from stackit.services.errors import InvalidInputError, NotFoundError

__all__ = [
    "authenticate",
    "create_user",
    "get_user",
    "get_user_by_username",
    "get_user_stats",
    "update_user_role",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.execute(select(User).where(User.username == username)).scalars().first()


def create_user(db: Session, user: UserCreate) -> User:
    """Register a new account with the default ``user`` role."""
    if get_user_by_username(db, user.username) is not None:
        raise InvalidInputError("Username already exists")

    db_user = User(
        username=user.username,
        password_hash=security.hash_password(user.password),
        role=ROLE_USER,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Registered user %s (id=%s)", db_user.username, db_user.id)
    return db_user


def authenticate(db: Session, username: str, password: str) -> User | None:
    """Return the user if the credentials match, otherwise None."""
    user = get_user_by_username(db, username)
    if user is None or not security.verify_password(user.password_hash, password):
        logger.warning("Login failed for %s", username)
        return None
    return user


def update_user_role(db: Session, user_id: int, role: str) -> User:
    """Change a user's role. Callers must already have checked for admin rights."""
    if role not in ROLES:
        raise InvalidInputError("Invalid role")
    db_user = get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User not found")

    db_user.role = role
    db.commit()
    db.refresh(db_user)
    logger.info("Role of user %s changed to %s", user_id, role)
    return db_user


def get_user_stats(db: Session, user_id: int) -> dict[str, int]:
    """Summarize a user's activity and the votes their content has collected.

    ``question_votes`` and ``answer_votes`` sum the cached counters on the
    user's own questions and answers.
    """
    if get_user(db, user_id) is None:
        raise NotFoundError("User not found")

    def _count(column, *conditions):
        return select(func.count(column)).where(*conditions).scalar_subquery()

    def _sum(column, *conditions):
        return select(func.coalesce(func.sum(column), 0)).where(*conditions).scalar_subquery()

    row = db.execute(
        select(
            _count(Question.id, Question.user_id == user_id).label("questions_asked"),
            _count(Answer.id, Answer.user_id == user_id).label("answers_provided"),
            _count(Vote.id, Vote.user_id == user_id).label("votes_cast"),
            _count(Answer.id, Answer.user_id == user_id, Answer.is_accepted.is_(True)).label(
                "accepted_answers"
            ),
            _sum(Question.votes, Question.user_id == user_id).label("question_votes"),
            _sum(Answer.votes, Answer.user_id == user_id).label("answer_votes"),
        )
    ).one()
    return {key: int(value or 0) for key, value in row._mapping.items()}
