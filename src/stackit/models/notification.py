# src/stackit/models/notification.py
"""Models describing notifications delivered to users."""

from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stackit.db.session import Base
from stackit.db.time import utcnow

NOTIFICATION_ANSWER = "answer"
NOTIFICATION_COMMENT = "comment"
NOTIFICATION_MENTION = "mention"
NOTIFICATION_VOTE = "vote"
NOTIFICATION_TYPES = (
    NOTIFICATION_ANSWER,
    NOTIFICATION_COMMENT,
    NOTIFICATION_MENTION,
    NOTIFICATION_VOTE,
)


class Notification(Base):
    """Message addressed to a single recipient about someone else's action."""

    __tablename__ = "notifications"
    __table_args__ = (
        CheckConstraint(
            "type IN ('answer', 'comment', 'mention', 'vote')",
            name="ck_notifications_type",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(default=False, nullable=False)
    # Entity that triggered the notification (answer, question, ...).
    related_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
