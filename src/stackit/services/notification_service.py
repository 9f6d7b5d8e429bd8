"""Notification emission and the per-user notification inbox."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from stackit.core.settings import settings
from stackit.db.time import days_ago
from stackit.models import Notification, User
from stackit.models.notification import (
    NOTIFICATION_ANSWER,
    NOTIFICATION_COMMENT,
    NOTIFICATION_MENTION,
    NOTIFICATION_TYPES,
    NOTIFICATION_VOTE,
)
from stackit.models.vote import UPVOTE
from stackit.repositories.notification_repo import NotificationRepository
from stackit.services.errors import InvalidInputError, NotFoundError
from stackit.services.events import AnswerPosted, EventBus, VoteCast

__all__ = [
    "MESSAGE_TEMPLATES",
    "NotificationEmitter",
    "NotificationService",
    "build_event_bus",
    "render_message",
]

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATES: dict[str, str] = {
    NOTIFICATION_VOTE: "{actor} upvoted your {target_type}",
    NOTIFICATION_ANSWER: "{actor} answered your question",
    NOTIFICATION_MENTION: "{actor} mentioned you in a {content_type}",
    NOTIFICATION_COMMENT: "{actor} commented on your {target_type}",
}

# Vote actions after which the final vote still stands.
_NOTIFYING_ACTIONS = frozenset({"added", "changed"})


def render_message(type_: str, actor: str, **context: Any) -> str:
    """Format the message text for a notification type."""
    return MESSAGE_TEMPLATES[type_].format(actor=actor, **context)


class NotificationEmitter:
    """Writes notifications as a best-effort side effect of other operations.

    `notify` never raises: a notification is a convenience and must not fail
    the operation that triggered it.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = NotificationRepository(session)

    def register(self, bus: EventBus) -> None:
        """Subscribe this emitter's handlers to ``bus``."""
        bus.subscribe(VoteCast, self.on_vote_cast)
        bus.subscribe(AnswerPosted, self.on_answer_posted)

    def notify(
        self,
        recipient_id: int,
        actor_id: int,
        type_: str,
        related_id: int | None,
        **context: Any,
    ) -> None:
        """Write a notification for ``recipient_id`` about ``actor_id``'s action."""
        if recipient_id == actor_id:
            return
        if type_ not in NOTIFICATION_TYPES:
            logger.warning("Ignoring notification with unknown type %r", type_)
            return

        try:
            actor = self.session.get(User, actor_id)
            if actor is None:
                logger.warning("Skipping %s notification: actor %s not found", type_, actor_id)
                return
            message = render_message(type_, actor.username, **context)
            self.repo.write(recipient_id, type_, message, related_id)
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.exception(
                "Failed to create %s notification for user %s", type_, recipient_id
            )
            return

        logger.info(
            "%s notification created for user %s (actor=%s, related=%s)",
            type_.capitalize(),
            recipient_id,
            actor_id,
            related_id,
        )

    def on_vote_cast(self, event: VoteCast) -> None:
        """Notify the target's owner when a vote ends up as an upvote."""
        if event.action not in _NOTIFYING_ACTIONS or event.vote_type != UPVOTE:
            return
        self.notify(
            event.owner_id,
            event.voter_id,
            NOTIFICATION_VOTE,
            event.target_id,
            target_type=event.target_type,
        )

    def on_answer_posted(self, event: AnswerPosted) -> None:
        """Notify a question's owner that someone else answered it."""
        self.notify(
            event.question_owner_id,
            event.author_id,
            NOTIFICATION_ANSWER,
            event.answer_id,
        )


def build_event_bus(session: Session) -> EventBus:
    """Return an event bus with the notification handlers bound to ``session``."""
    bus = EventBus()
    NotificationEmitter(session).register(bus)
    return bus


class NotificationService:
    """Recipient-facing operations on a user's notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = NotificationRepository(session)

    def list_notifications(
        self,
        user_id: int,
        *,
        limit: int = 20,
        offset: int = 0,
        unread_only: bool = False,
        type_: str | None = None,
    ) -> dict[str, Any]:
        """Return a page of notifications with pagination metadata."""
        if type_ is not None and type_ not in NOTIFICATION_TYPES:
            raise InvalidInputError("Invalid notification type")
        items, total = self.repo.list_for_user(
            user_id,
            limit=limit,
            offset=offset,
            unread_only=unread_only,
            type_=type_,
        )
        return {
            "notifications": items,
            "pagination": {
                "total": total,
                "limit": limit,
                "offset": offset,
                "has_more": offset + limit < total,
            },
        }

    def unread_count(self, user_id: int) -> int:
        return self.repo.unread_count(user_id)

    def get_notification(self, notification_id: int, user_id: int) -> Notification:
        notification = self.repo.get(notification_id, user_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    def mark_as_read(self, notification_id: int, user_id: int) -> None:
        """Mark one of the user's notifications as read."""
        if self.repo.mark_read(notification_id, user_id) == 0:
            self.session.rollback()
            raise NotFoundError(
                "Notification not found or you do not have permission to modify it"
            )
        self.session.commit()

    def mark_all_as_read(self, user_id: int) -> int:
        changed = self.repo.mark_all_read(user_id)
        self.session.commit()
        return changed

    def delete_notification(self, notification_id: int, user_id: int) -> None:
        """Delete one of the user's notifications."""
        if self.repo.delete(notification_id, user_id) == 0:
            self.session.rollback()
            raise NotFoundError(
                "Notification not found or you do not have permission to delete it"
            )
        self.session.commit()

    def delete_all_notifications(self, user_id: int) -> int:
        deleted = self.repo.delete_all(user_id)
        self.session.commit()
        return deleted

    def stats(self, user_id: int) -> dict[str, int]:
        return self.repo.stats_for_user(user_id)

    def cleanup_old_notifications(self, days_old: int | None = None) -> int:
        """Delete notifications older than ``days_old`` days across all users."""
        days = settings.notification_retention_days if days_old is None else days_old
        if days < 0:
            raise InvalidInputError("days_old must not be negative")
        deleted = self.repo.delete_older_than(days_ago(days))
        self.session.commit()
        logger.info("Cleaned up %d notifications older than %d days", deleted, days)
        return deleted
