"""Answer-related endpoints for the StackIt API."""

from typing import Any

from fastapi import APIRouter, Query, status

from stackit.models.vote import TARGET_ANSWER
from stackit.schemas.answer import AnswerCreate, AnswerResponse, AnswerUpdate
from stackit.services import answer_service
from stackit.services.authorization import ensure_can_modify

from ..dependencies import CurrentUserDep, EventBusDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/answers", tags=["answers"])


@router.get("/question/{question_id}", response_model=list[AnswerResponse])
async def list_answers_for_question(
    question_id: int,
    viewer: OptionalUserDep,
    db: SessionDep,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[AnswerResponse]:
    """List a question's answers, accepted first, then by votes."""
    answers = answer_service.list_answers(db, question_id, limit=limit, offset=offset)
    return answer_service.to_answer_out(db, answers, viewer)


@router.get("/{answer_id}", response_model=AnswerResponse)
async def get_answer(
    answer_id: int,
    viewer: OptionalUserDep,
    db: SessionDep,
) -> AnswerResponse:
    answer = answer_service.get_answer(db, answer_id)
    return answer_service.to_answer_out(db, [answer], viewer)[0]


@router.post("/", response_model=AnswerResponse, status_code=status.HTTP_201_CREATED)
async def create_answer(
    payload: AnswerCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    bus: EventBusDep,
) -> AnswerResponse:
    """Answer a question; its author is notified."""
    answer = answer_service.create_answer(db, current_user, payload, bus)
    return answer_service.to_answer_out(db, [answer], current_user)[0]


@router.put("/{answer_id}", response_model=AnswerResponse)
async def update_answer(
    answer_id: int,
    payload: AnswerUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> AnswerResponse:
    """Edit an answer. Owner or admin only."""
    answer = ensure_can_modify(db, current_user, TARGET_ANSWER, answer_id)
    answer = answer_service.update_answer(db, answer, payload)
    return answer_service.to_answer_out(db, [answer], current_user)[0]


@router.delete("/{answer_id}")
async def delete_answer(
    answer_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Delete an answer and its votes. Owner or admin only."""
    answer = ensure_can_modify(db, current_user, TARGET_ANSWER, answer_id)
    answer_service.delete_answer(db, answer)
    return {"success": True, "message": "Answer deleted successfully"}
