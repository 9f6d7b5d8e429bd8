"""Data access helpers for notifications."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.orm import Session

from stackit.models import Notification
from stackit.models.notification import NOTIFICATION_TYPES

__all__ = ["NotificationRepository"]


class NotificationRepository:
    """Thin wrapper around database access for notification rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def write(
        self,
        user_id: int,
        type_: str,
        message: str,
        related_id: int | None = None,
    ) -> Notification:
        """Insert a notification and flush it so it receives an id."""
        notification = Notification(
            user_id=user_id,
            type=type_,
            message=message,
            related_id=related_id,
        )
        self.session.add(notification)
        self.session.flush()
        return notification

    def get(self, notification_id: int, user_id: int) -> Notification | None:
        """Return a notification only if it belongs to ``user_id``."""
        return self.session.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
        ).scalars().first()

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int,
        offset: int,
        unread_only: bool = False,
        type_: str | None = None,
    ) -> tuple[list[Notification], int]:
        """Return one page of a user's notifications and the filtered total."""
        conditions = [Notification.user_id == user_id]
        if unread_only:
            conditions.append(Notification.is_read.is_(False))
        if type_:
            conditions.append(Notification.type == type_)

        items = self.session.execute(
            select(Notification)
            .where(*conditions)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .offset(offset)
        ).scalars()
        total = self.session.execute(
            select(func.count(Notification.id)).where(*conditions)
        ).scalar_one()
        return list(items), int(total)

    def unread_count(self, user_id: int) -> int:
        """Return how many unread notifications a user has."""
        return int(
            self.session.execute(
                select(func.count(Notification.id)).where(
                    Notification.user_id == user_id,
                    Notification.is_read.is_(False),
                )
            ).scalar_one()
        )

    def mark_read(self, notification_id: int, user_id: int) -> int:
        """Mark a single notification as read; return the affected row count."""
        result = self.session.execute(
            update(Notification)
            .where(Notification.id == notification_id, Notification.user_id == user_id)
            .values(is_read=True)
        )
        return result.rowcount or 0

    def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification of a user as read."""
        result = self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        return result.rowcount or 0

    def delete(self, notification_id: int, user_id: int) -> int:
        """Delete one of the user's notifications."""
        result = self.session.execute(
            delete(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
        )
        return result.rowcount or 0

    def delete_all(self, user_id: int) -> int:
        """Delete all of a user's notifications."""
        result = self.session.execute(
            delete(Notification).where(Notification.user_id == user_id)
        )
        return result.rowcount or 0

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete notifications created before ``cutoff`` for every user."""
        result = self.session.execute(
            delete(Notification).where(Notification.created_at < cutoff)
        )
        return result.rowcount or 0

    def stats_for_user(self, user_id: int) -> dict[str, int]:
        """Aggregate read-state and per-type counts for a user."""
        columns = [
            func.count(Notification.id).label("total_notifications"),
            func.sum(case((Notification.is_read.is_(False), 1), else_=0)).label(
                "unread_notifications"
            ),
            func.sum(case((Notification.is_read.is_(True), 1), else_=0)).label(
                "read_notifications"
            ),
        ]
        columns.extend(
            func.sum(case((Notification.type == type_, 1), else_=0)).label(
                f"{type_}_notifications"
            )
            for type_ in NOTIFICATION_TYPES
        )
        row = self.session.execute(
            select(*columns).where(Notification.user_id == user_id)
        ).one()
        return {key: int(value or 0) for key, value in row._mapping.items()}
