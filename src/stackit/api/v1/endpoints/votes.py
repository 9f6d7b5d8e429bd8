"""Vote-related endpoints for the StackIt API."""

from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from stackit.api.errors import error_response
from stackit.models.vote import TARGET_TYPES
from stackit.repositories.vote_repo import VoteRepository
from stackit.schemas.vote import BulkVoteRequest, VoteCreate, VoteResponse
from stackit.services.errors import InvalidInputError

from ..dependencies import CurrentUserDep, SessionDep, VoteServiceDep

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResponse)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    vote_service: VoteServiceDep,
) -> VoteResponse | JSONResponse:
    """Cast, flip or toggle off a vote on a question or answer."""
    result = vote_service.cast_vote(
        current_user.id,
        vote_data.target_id,
        vote_data.target_type,
        vote_data.vote_type,
    )
    if not result.success:
        return error_response(result.error, result.message)
    return VoteResponse(
        success=True,
        message=result.message,
        vote_change=result.vote_change,
        action=result.action or "",
    )


@router.post("/bulk")
async def get_user_votes(
    payload: BulkVoteRequest,
    current_user: CurrentUserDep,
    vote_service: VoteServiceDep,
) -> dict[str, Any]:
    """Return the caller's votes on a batch of targets."""
    votes = vote_service.get_user_votes(
        current_user.id,
        [target.model_dump() for target in payload.targets],
    )
    return {"success": True, "votes": votes}


@router.get("/stats")
async def get_user_vote_stats(
    current_user: CurrentUserDep,
    vote_service: VoteServiceDep,
) -> dict[str, Any]:
    """Summarize the votes the caller has cast."""
    return {"success": True, "stats": vote_service.get_user_vote_stats(current_user.id)}


@router.get("/history")
async def get_user_vote_history(
    current_user: CurrentUserDep,
    vote_service: VoteServiceDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> dict[str, Any]:
    """List the caller's votes, newest first."""
    history = vote_service.get_user_vote_history(current_user.id, limit=limit, offset=offset)
    return {"success": True, **history}


@router.get("/top/{content_type}")
async def get_top_voted_content(
    content_type: str,
    vote_service: VoteServiceDep,
    limit: int | None = Query(None, ge=1, le=100),
) -> dict[str, Any]:
    """List the highest voted questions or answers."""
    return {
        "success": True,
        "content": vote_service.get_top_voted_content(content_type, limit),
    }


@router.get("/{target_type}/{target_id}/my-vote")
async def get_my_vote(
    target_type: str,
    target_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, str | None]:
    """Get the caller's vote on a specific target."""
    if target_type not in TARGET_TYPES:
        raise InvalidInputError("Invalid target type")
    vote = VoteRepository(db).get_vote(current_user.id, target_id, target_type)
    return {"vote_type": vote.vote_type if vote else None}
