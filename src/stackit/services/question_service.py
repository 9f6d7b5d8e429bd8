"""Service-level helpers for questions."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from stackit.models import Answer, Question, User
from stackit.models.vote import TARGET_ANSWER, TARGET_QUESTION
from stackit.repositories.vote_repo import VoteRepository
from stackit.schemas.question import QuestionCreate, QuestionResponse, QuestionUpdate
from stackit.services.errors import ForbiddenError, NotFoundError

__all__ = [
    "accept_answer",
    "create_question",
    "delete_question",
    "get_question",
    "to_question_out",
    "update_question",
]

logger = logging.getLogger(__name__)


def create_question(db: Session, author: User, payload: QuestionCreate) -> Question:
    """Persist a new question owned by ``author``."""
    question = Question(
        title=payload.title,
        description=payload.description,
        user_id=author.id,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("Question %s created by user %s", question.id, author.id)
    return question


def get_question(db: Session, question_id: int, *, count_view: bool = True) -> Question:
    """Return a question, bumping its view counter unless told otherwise."""
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if count_view:
        db.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(view_count=Question.view_count + 1)
        )
        db.commit()
        db.refresh(question)
    return question


def to_question_out(db: Session, question: Question, viewer: User | None) -> QuestionResponse:
    """Convert a Question ORM instance to an API schema including the viewer's vote."""
    out = QuestionResponse.model_validate(question)
    if viewer is not None:
        vote = VoteRepository(db).get_vote(viewer.id, question.id, TARGET_QUESTION)
        out.user_vote = vote.vote_type if vote else None
    return out


def update_question(db: Session, question: Question, payload: QuestionUpdate) -> Question:
    """Apply partial updates to an existing question."""
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(question, key, value)
    db.commit()
    db.refresh(question)
    return question


def delete_question(db: Session, question: Question) -> None:
    """Delete a question together with its answers and every vote on either.

    Votes reference their target by id only, so they are removed explicitly
    in the same transaction as the rows they point at.
    """
    question_id = question.id
    repo = VoteRepository(db)
    answer_ids = db.execute(
        select(Answer.id).where(Answer.question_id == question_id)
    ).scalars().all()
    with repo.atomic():
        removed = repo.delete_target_votes(TARGET_ANSWER, answer_ids)
        removed += repo.delete_target_votes(TARGET_QUESTION, [question_id])
        # Delete answers here too so the result does not depend on FK enforcement.
        db.execute(Answer.__table__.delete().where(Answer.question_id == question_id))
        db.delete(question)
    logger.info("Question %s deleted with %d votes", question_id, removed)


def accept_answer(db: Session, caller: User, question_id: int, answer_id: int) -> Question:
    """Mark ``answer_id`` as the accepted answer of ``question_id``.

    Only the question's author may accept, and at most one answer is accepted
    at a time.
    """
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if question.user_id != caller.id:
        raise ForbiddenError("Only the question author can accept answers")

    answer = db.execute(
        select(Answer).where(Answer.id == answer_id, Answer.question_id == question_id)
    ).scalars().first()
    if answer is None:
        raise NotFoundError("Answer not found for this question")

    db.execute(
        update(Answer).where(Answer.question_id == question_id).values(is_accepted=False)
    )
    answer.is_accepted = True
    question.accepted_answer_id = answer.id
    db.commit()
    db.refresh(question)
    return question
