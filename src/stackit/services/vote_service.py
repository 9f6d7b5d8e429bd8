"""Vote ledger: state transitions for votes and their counter deltas."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from stackit.core.settings import settings
from stackit.models.vote import TARGET_TYPES, VOTE_TYPES, VOTE_WEIGHTS
from stackit.repositories.vote_repo import TargetRef, VoteRepository
from stackit.services.errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
)
from stackit.services.events import EventBus, VoteCast

__all__ = [
    "ACTION_ADDED",
    "ACTION_CHANGED",
    "ACTION_REMOVED",
    "MAX_CAST_ATTEMPTS",
    "VoteResult",
    "VoteService",
    "classify_transition",
]

logger = logging.getLogger(__name__)

ACTION_ADDED = "added"
ACTION_REMOVED = "removed"
ACTION_CHANGED = "changed"

# Attempts per cast when a concurrent cast by the same user wins the race.
MAX_CAST_ATTEMPTS = 3


@dataclass(frozen=True, slots=True)
class VoteResult:
    """Outcome of a cast-vote request.

    Failures carry the error ``kind`` so the caller can choose a status code;
    they never escape as exceptions.
    """

    success: bool
    message: str
    action: str | None = None
    vote_change: int = 0
    error: str | None = None

    @classmethod
    def failure(cls, err: ServiceError) -> VoteResult:
        return cls(success=False, message=err.message, error=err.kind)


def classify_transition(existing: str | None, requested: str) -> tuple[str, int]:
    """Return the action and counter delta for moving from ``existing`` to ``requested``.

    Re-casting the vote already held removes it; casting the opposite vote
    flips it, which moves the counter by two.
    """
    weight = VOTE_WEIGHTS[requested]
    if existing is None:
        return ACTION_ADDED, weight
    if existing == requested:
        return ACTION_REMOVED, -weight
    return ACTION_CHANGED, 2 * weight


class VoteService:
    """Casts votes and answers queries about them.

    The vote row and the target's counter are always written in one
    transaction. The resulting `VoteCast` event is published only after that
    transaction commits.
    """

    def __init__(self, session: Session, bus: EventBus | None = None) -> None:
        self.repo = VoteRepository(session)
        self.bus = bus or EventBus()

    def _load_target(self, voter_id: int, target_id: int, target_type: str, vote_type: str) -> TargetRef:
        if target_type not in TARGET_TYPES:
            raise InvalidInputError("Invalid target type")
        if vote_type not in VOTE_TYPES:
            raise InvalidInputError("Invalid vote type")

        target = self.repo.get_target(target_type, target_id)
        if target is None:
            raise NotFoundError(f"{target_type} not found")
        if target.owner_id == voter_id:
            raise ForbiddenError("You cannot vote on your own content")
        return target

    def _apply_vote(
        self,
        voter_id: int,
        target_id: int,
        target_type: str,
        vote_type: str,
    ) -> tuple[str, int]:
        """Run one transaction that moves the vote row and the counter together.

        Raises:
            StaleDataError: If a concurrent cast changed the vote after it was read.
        """
        with self.repo.atomic():
            existing = self.repo.get_vote(voter_id, target_id, target_type, for_update=True)
            current = existing.vote_type if existing else None
            action, delta = classify_transition(current, vote_type)
            if existing is None:
                self.repo.write_vote(voter_id, target_id, target_type, vote_type)
            elif action == ACTION_REMOVED:
                self.repo.delete_vote(existing.id, current)
            else:
                self.repo.update_vote(existing.id, current, vote_type)

            if self.repo.adjust_counter(target_type, target_id, delta) == 0:
                # Target vanished after it was loaded; roll the vote back.
                raise NotFoundError(f"{target_type} not found")
        return action, delta

    def cast_vote(
        self,
        voter_id: int,
        target_id: int,
        target_type: str,
        vote_type: str,
    ) -> VoteResult:
        """Add, flip or toggle off ``voter_id``'s vote on a target.

        A cast that loses a race with another cast by the same user is rolled
        back and re-evaluated against the new state, up to
        ``MAX_CAST_ATTEMPTS`` times.

        Args:
            voter_id: Id of the user casting the vote.
            target_id: Id of the question or answer.
            target_type: ``"question"`` or ``"answer"``.
            vote_type: ``"upvote"`` or ``"downvote"``.

        Returns:
            A `VoteResult` describing the applied action and counter delta, or
            a failure for invalid input, a missing target or a self-vote.

        Raises:
            SQLAlchemyError: If the store fails or the retries run out; the
                transaction is rolled back.
        """
        logger.debug(
            "Casting %s on %s %s by user %s", vote_type, target_type, target_id, voter_id
        )
        try:
            target = self._load_target(voter_id, target_id, target_type, vote_type)
            for attempt in range(1, MAX_CAST_ATTEMPTS + 1):
                try:
                    action, delta = self._apply_vote(voter_id, target_id, target_type, vote_type)
                    break
                except StaleDataError:
                    if attempt == MAX_CAST_ATTEMPTS:
                        raise
                    logger.info(
                        "Vote by user %s on %s %s raced another cast; retrying (attempt %d)",
                        voter_id,
                        target_type,
                        target_id,
                        attempt,
                    )
        except ServiceError as err:
            logger.info(
                "Vote by user %s on %s %s rejected: %s",
                voter_id,
                target_type,
                target_id,
                err.message,
            )
            return VoteResult.failure(err)
        except SQLAlchemyError:
            logger.exception("Error casting vote")
            raise

        self.bus.publish(
            VoteCast(
                voter_id=voter_id,
                owner_id=target.owner_id,
                target_id=target_id,
                target_type=target_type,
                vote_type=vote_type,
                action=action,
                vote_change=delta,
            )
        )
        return VoteResult(
            success=True,
            message=f"Vote {action} successfully",
            action=action,
            vote_change=delta,
        )

    def get_user_votes(
        self,
        user_id: int,
        targets: Sequence[Mapping[str, Any]],
    ) -> dict[str, str]:
        """Return the user's votes keyed by ``"<type>_<id>"`` for each requested target."""
        pairs = [(int(target["id"]), str(target["type"])) for target in targets]
        if not pairs:
            return {}
        votes = self.repo.votes_for_targets(user_id, pairs)
        return {f"{vote.target_type}_{vote.target_id}": vote.vote_type for vote in votes}

    def get_user_vote_stats(self, user_id: int) -> dict[str, int]:
        return self.repo.stats_for_user(user_id)

    def get_top_voted_content(
        self,
        content_type: str,
        limit: int | None = None,
    ) -> list[dict[str, object]]:
        """Return the highest voted questions or answers."""
        if content_type not in TARGET_TYPES:
            raise InvalidInputError("Invalid content type")
        limit = settings.top_voted_limit if limit is None else limit
        if content_type == "question":
            return self.repo.top_questions(limit)
        return self.repo.top_answers(limit)

    def get_user_vote_history(
        self,
        user_id: int,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> dict[str, Any]:
        """Return the user's votes newest first with pagination metadata."""
        votes = self.repo.history_for_user(user_id, limit, offset)
        total = self.repo.count_for_user(user_id)
        return {
            "votes": votes,
            "pagination": {
                "total": total,
                "limit": limit,
                "offset": offset,
                "has_more": offset + limit < total,
            },
        }
