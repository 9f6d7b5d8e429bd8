"""Question-related endpoints for the StackIt API."""

from typing import Any

from fastapi import APIRouter, status

from stackit.models.vote import TARGET_QUESTION
from stackit.schemas.question import (
    AcceptAnswerRequest,
    QuestionCreate,
    QuestionResponse,
    QuestionUpdate,
)
from stackit.services import question_service
from stackit.services.authorization import ensure_can_modify

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post("/", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: QuestionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> QuestionResponse:
    """Ask a new question."""
    question = question_service.create_question(db, current_user, payload)
    return question_service.to_question_out(db, question, current_user)


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: int,
    viewer: OptionalUserDep,
    db: SessionDep,
) -> QuestionResponse:
    """Fetch a question; counts as a view and includes the caller's vote."""
    question = question_service.get_question(db, question_id)
    return question_service.to_question_out(db, question, viewer)


@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: int,
    payload: QuestionUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> QuestionResponse:
    """Edit a question. Owner or admin only."""
    question = ensure_can_modify(db, current_user, TARGET_QUESTION, question_id)
    question = question_service.update_question(db, question, payload)
    return question_service.to_question_out(db, question, current_user)


@router.delete("/{question_id}")
async def delete_question(
    question_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Delete a question with its answers and votes. Owner or admin only."""
    question = ensure_can_modify(db, current_user, TARGET_QUESTION, question_id)
    question_service.delete_question(db, question)
    return {"success": True, "message": "Question deleted successfully"}


@router.post("/{question_id}/accept", response_model=QuestionResponse)
async def accept_answer(
    question_id: int,
    payload: AcceptAnswerRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> QuestionResponse:
    """Accept one of the question's answers. Question author only."""
    question = question_service.accept_answer(db, current_user, question_id, payload.answer_id)
    return question_service.to_question_out(db, question, current_user)
