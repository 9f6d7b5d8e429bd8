"""In-process domain events and the bus that dispatches them.

Events are published after the transaction that produced them has committed.
Subscribers run synchronously in registration order; a failing subscriber is
logged and never affects the publisher or the other subscribers.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from stackit.db.time import utcnow

__all__ = ["AnswerPosted", "EventBus", "VoteCast"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VoteCast:
    """A vote was added, changed or removed on a question or answer."""

    voter_id: int
    owner_id: int
    target_id: int
    target_type: str
    vote_type: str
    action: str
    vote_change: int
    timestamp: datetime = field(default_factory=utcnow)


@dataclass(frozen=True, slots=True)
class AnswerPosted:
    """A new answer was posted to a question."""

    answer_id: int
    question_id: int
    question_owner_id: int
    author_id: int
    timestamp: datetime = field(default_factory=utcnow)


Handler = Callable[[Any], None]


class EventBus:
    """Synchronous publish/subscribe dispatcher keyed by event class."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: Handler) -> None:
        """Register ``handler`` to receive events of ``event_type``."""
        self._handlers[event_type].append(handler)

    def handlers_for(self, event_type: type) -> list[Handler]:
        """Return the handlers registered for ``event_type``."""
        return list(self._handlers.get(event_type, ()))

    def publish(self, event: object) -> None:
        """Deliver ``event`` to every subscriber, swallowing their failures."""
        for handler in self.handlers_for(type(event)):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Event handler %r failed for %s",
                    handler,
                    type(event).__name__,
                )
