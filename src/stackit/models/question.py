# src/stackit/models/question.py
"""SQLAlchemy model for questions."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow


class Question(Base):
    """Question asked by a user; a vote target."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Plain column: answers reference questions, so a second FK would form a cycle.
    accepted_answer_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Denormalized sum of vote weights; only ever adjusted by relative deltas.
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)
