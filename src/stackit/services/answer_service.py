"""Service-level helpers for answers."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from stackit.models import Answer, Question, User
from stackit.models.vote import TARGET_ANSWER
from stackit.repositories.vote_repo import VoteRepository
from stackit.schemas.answer import AnswerCreate, AnswerResponse, AnswerUpdate
from stackit.services.errors import NotFoundError
from stackit.services.events import AnswerPosted, EventBus

__all__ = [
    "create_answer",
    "delete_answer",
    "get_answer",
    "list_answers",
    "to_answer_out",
    "update_answer",
]

logger = logging.getLogger(__name__)


def create_answer(db: Session, author: User, payload: AnswerCreate, bus: EventBus) -> Answer:
    """Persist an answer and publish `AnswerPosted` once it is committed."""
    question = db.get(Question, payload.question_id)
    if question is None:
        raise NotFoundError("Question not found")
    question_owner_id = question.user_id

    answer = Answer(
        question_id=question.id,
        user_id=author.id,
        content=payload.content,
    )
    db.add(answer)
    db.commit()
    db.refresh(answer)
    logger.info("Answer %s posted to question %s by user %s", answer.id, question.id, author.id)

    bus.publish(
        AnswerPosted(
            answer_id=answer.id,
            question_id=answer.question_id,
            question_owner_id=question_owner_id,
            author_id=author.id,
        )
    )
    return answer


def get_answer(db: Session, answer_id: int) -> Answer:
    answer = db.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    return answer


def list_answers(db: Session, question_id: int, *, limit: int = 10, offset: int = 0) -> list[Answer]:
    """Return a question's answers, accepted first, then by votes."""
    if db.get(Question, question_id) is None:
        raise NotFoundError("Question not found")
    return list(
        db.execute(
            select(Answer)
            .where(Answer.question_id == question_id)
            .order_by(Answer.is_accepted.desc(), Answer.votes.desc(), Answer.id)
            .limit(limit)
            .offset(offset)
        ).scalars()
    )


def to_answer_out(db: Session, answers: list[Answer], viewer: User | None) -> list[AnswerResponse]:
    """Convert answers to API schemas, attaching the viewer's vote on each."""
    out = [AnswerResponse.model_validate(answer) for answer in answers]
    if viewer is None or not out:
        return out
    votes = VoteRepository(db).votes_for_targets(
        viewer.id, [(answer.id, TARGET_ANSWER) for answer in answers]
    )
    by_target = {vote.target_id: vote.vote_type for vote in votes}
    for item in out:
        item.user_vote = by_target.get(item.id)
    return out


def update_answer(db: Session, answer: Answer, payload: AnswerUpdate) -> Answer:
    answer.content = payload.content
    db.commit()
    db.refresh(answer)
    return answer


def delete_answer(db: Session, answer: Answer) -> None:
    """Delete an answer, its votes, and its acceptance on the parent question."""
    answer_id = answer.id
    repo = VoteRepository(db)
    with repo.atomic():
        db.execute(
            update(Question)
            .where(Question.accepted_answer_id == answer_id)
            .values(accepted_answer_id=None)
        )
        removed = repo.delete_target_votes(TARGET_ANSWER, [answer_id])
        db.delete(answer)
    logger.info("Answer %s deleted with %d votes", answer_id, removed)
