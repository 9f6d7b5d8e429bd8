# src/stackit/models/vote.py
"""Models capturing votes on questions and answers."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow

TARGET_QUESTION = "question"
TARGET_ANSWER = "answer"
TARGET_TYPES = (TARGET_QUESTION, TARGET_ANSWER)

UPVOTE = "upvote"
DOWNVOTE = "downvote"
VOTE_TYPES = (UPVOTE, DOWNVOTE)

# Signed weight each vote contributes to its target's counter.
VOTE_WEIGHTS = {UPVOTE: 1, DOWNVOTE: -1}


class Vote(Base):
    """Per-user vote on a question or answer.

    The target is referenced by id plus a discriminator rather than a foreign
    key, so cascades on target deletion are applied by the content services.
    """

    __tablename__ = "votes"
    __table_args__ = (
        # A user holds at most one vote per target.
        UniqueConstraint("user_id", "target_id", "target_type", name="uq_votes_user_target"),
        CheckConstraint("target_type IN ('question', 'answer')", name="ck_votes_target_type"),
        CheckConstraint("vote_type IN ('upvote', 'downvote')", name="ck_votes_vote_type"),
        Index("ix_votes_target", "target_type", "target_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    target_type: Mapped[str] = mapped_column(String(16), nullable=False)
    vote_type: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
