"""Data access helpers for votes and the counters they drive."""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import and_, case, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from stackit.models import Answer, Question, User, Vote
from stackit.models.vote import (
    DOWNVOTE,
    TARGET_ANSWER,
    TARGET_QUESTION,
    TARGET_TYPES,
    UPVOTE,
)

__all__ = ["TargetRef", "VoteRepository", "target_model"]


@dataclass(frozen=True, slots=True)
class TargetRef:
    """Minimal view of a vote target: its id and its owner."""

    id: int
    owner_id: int


def target_model(target_type: str) -> type[Question] | type[Answer]:
    """Return the ORM model backing a target type."""
    if target_type == TARGET_QUESTION:
        return Question
    if target_type == TARGET_ANSWER:
        return Answer
    raise ValueError(f"Unknown target type: {target_type!r}")


class VoteRepository:
    """Thin wrapper around database access for vote rows and target counters.

    Every statement uses bound parameters. Mutations are meant to run inside
    `atomic()` so that the vote row and the counter commit together.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Commit the enclosed work on success; roll all of it back otherwise."""
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def get_target(self, target_type: str, target_id: int) -> TargetRef | None:
        """Return the id and owner of a question or answer."""
        model = target_model(target_type)
        row = self.session.execute(
            select(model.id, model.user_id).where(model.id == target_id)
        ).first()
        if row is None:
            return None
        return TargetRef(id=row.id, owner_id=row.user_id)

    def get_vote(
        self,
        user_id: int,
        target_id: int,
        target_type: str,
        *,
        for_update: bool = False,
    ) -> Vote | None:
        """Return the user's vote on a target.

        With ``for_update`` the row is locked where the dialect supports it and
        the instance is reloaded from the database even if already in the session.
        """
        stmt = select(Vote).where(
            Vote.user_id == user_id,
            Vote.target_id == target_id,
            Vote.target_type == target_type,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.session.execute(stmt).scalars().first()

    def write_vote(self, user_id: int, target_id: int, target_type: str, vote_type: str) -> Vote:
        """Insert a new vote row.

        Raises:
            StaleDataError: If another transaction already inserted this user's vote.
        """
        vote = Vote(
            user_id=user_id,
            target_id=target_id,
            target_type=target_type,
            vote_type=vote_type,
        )
        self.session.add(vote)
        try:
            self.session.flush()
        except IntegrityError as err:
            raise StaleDataError(
                f"vote by user {user_id} on {target_type} {target_id} already exists"
            ) from err
        return vote

    def update_vote(self, vote_id: int, from_type: str, to_type: str) -> None:
        """Flip a vote, provided it still holds ``from_type``.

        Raises:
            StaleDataError: If the row changed or vanished since it was read.
        """
        result = self.session.execute(
            update(Vote)
            .where(Vote.id == vote_id, Vote.vote_type == from_type)
            .values(vote_type=to_type)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise StaleDataError(f"vote {vote_id} is no longer {from_type!r}")

    def delete_vote(self, vote_id: int, vote_type: str) -> None:
        """Remove a vote, provided it still holds ``vote_type``.

        Raises:
            StaleDataError: If the row changed or vanished since it was read.
        """
        result = self.session.execute(
            delete(Vote)
            .where(Vote.id == vote_id, Vote.vote_type == vote_type)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise StaleDataError(f"vote {vote_id} is no longer {vote_type!r}")

    def adjust_counter(self, target_type: str, target_id: int, delta: int) -> int:
        """Apply a relative change to a target's cached vote counter.

        Returns the number of target rows updated (0 if the target is gone).
        """
        model = target_model(target_type)
        result = self.session.execute(
            update(model)
            .where(model.id == target_id)
            .values(votes=model.votes + delta)
        )
        return result.rowcount or 0

    def tally(self, target_type: str, target_id: int) -> int:
        """Recompute the signed vote sum for a target from its vote rows.

        The cached ``votes`` counter on the target must always equal this value;
        use it to audit a counter, never to serve reads.
        """
        weight = case((Vote.vote_type == UPVOTE, 1), else_=-1)
        total = self.session.execute(
            select(func.coalesce(func.sum(weight), 0)).where(
                Vote.target_id == target_id,
                Vote.target_type == target_type,
            )
        ).scalar_one()
        return int(total)

    def delete_target_votes(self, target_type: str, target_ids: Iterable[int]) -> int:
        """Delete every vote referencing the given targets; return the row count."""
        ids = list(target_ids)
        if not ids:
            return 0
        result = self.session.execute(
            delete(Vote).where(
                Vote.target_type == target_type,
                Vote.target_id.in_(ids),
            )
        )
        return result.rowcount or 0

    def votes_for_targets(
        self,
        user_id: int,
        targets: Sequence[tuple[int, str]],
    ) -> list[Vote]:
        """Return the user's votes over a list of ``(target_id, target_type)`` pairs."""
        conditions = [
            and_(Vote.target_id == target_id, Vote.target_type == target_type)
            for target_id, target_type in targets
            if target_type in TARGET_TYPES
        ]
        if not conditions:
            return []
        stmt = select(Vote).where(Vote.user_id == user_id, or_(*conditions))
        return list(self.session.execute(stmt).scalars())

    def stats_for_user(self, user_id: int) -> dict[str, int]:
        """Aggregate counts of the votes a user has cast."""
        row = self.session.execute(
            select(
                func.count(Vote.id).label("total_votes"),
                func.coalesce(func.sum(case((Vote.vote_type == UPVOTE, 1), else_=0)), 0).label(
                    "upvotes"
                ),
                func.coalesce(func.sum(case((Vote.vote_type == DOWNVOTE, 1), else_=0)), 0).label(
                    "downvotes"
                ),
                func.coalesce(
                    func.sum(case((Vote.target_type == TARGET_QUESTION, 1), else_=0)), 0
                ).label("question_votes"),
                func.coalesce(
                    func.sum(case((Vote.target_type == TARGET_ANSWER, 1), else_=0)), 0
                ).label("answer_votes"),
            ).where(Vote.user_id == user_id)
        ).one()
        return {key: int(value or 0) for key, value in row._mapping.items()}

    def top_questions(self, limit: int) -> list[dict[str, object]]:
        """Return positively voted questions, highest first."""
        rows = self.session.execute(
            select(
                Question.id,
                Question.title,
                Question.votes,
                Question.view_count,
                Question.created_at,
                User.username.label("author"),
            )
            .join(User, Question.user_id == User.id)
            .where(Question.votes > 0)
            .order_by(Question.votes.desc(), Question.id)
            .limit(limit)
        ).all()
        return [dict(row._mapping) for row in rows]

    def top_answers(self, limit: int) -> list[dict[str, object]]:
        """Return positively voted answers, highest first."""
        rows = self.session.execute(
            select(
                Answer.id,
                Answer.content,
                Answer.votes,
                Answer.is_accepted,
                Answer.created_at,
                Answer.question_id,
                User.username.label("author"),
                Question.title.label("question_title"),
            )
            .join(User, Answer.user_id == User.id)
            .join(Question, Answer.question_id == Question.id)
            .where(Answer.votes > 0)
            .order_by(Answer.votes.desc(), Answer.id)
            .limit(limit)
        ).all()
        return [dict(row._mapping) for row in rows]

    def history_for_user(self, user_id: int, limit: int, offset: int) -> list[dict[str, object]]:
        """Return the user's votes newest first with a short content preview."""
        preview = case(
            (Vote.target_type == TARGET_QUESTION, Question.title),
            else_=Answer.content,
        )
        rows = self.session.execute(
            select(
                Vote.target_id,
                Vote.target_type,
                Vote.vote_type,
                Vote.created_at,
                preview.label("content_preview"),
            )
            .outerjoin(
                Question,
                and_(Vote.target_type == TARGET_QUESTION, Vote.target_id == Question.id),
            )
            .outerjoin(
                Answer,
                and_(Vote.target_type == TARGET_ANSWER, Vote.target_id == Answer.id),
            )
            .where(Vote.user_id == user_id)
            .order_by(Vote.created_at.desc(), Vote.id.desc())
            .limit(limit)
            .offset(offset)
        ).all()
        return [dict(row._mapping) for row in rows]

    def count_for_user(self, user_id: int) -> int:
        """Return how many votes a user currently holds."""
        return int(
            self.session.execute(
                select(func.count(Vote.id)).where(Vote.user_id == user_id)
            ).scalar_one()
        )
