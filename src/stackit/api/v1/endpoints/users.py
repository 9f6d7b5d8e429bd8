"""User-related endpoints for the StackIt API."""

from typing import Any

from fastapi import APIRouter, status

from stackit.schemas.user import RoleUpdate, UserCreate, UserResponse
from stackit.services import user_service
from stackit.services.errors import NotFoundError

from ..dependencies import AdminUserDep, CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(payload: UserCreate, db: SessionDep) -> UserResponse:
    """Create an account. New accounts always get the ``user`` role."""
    user = user_service.create_user(db, payload)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: SessionDep) -> UserResponse:
    user = user_service.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse.model_validate(user)


@router.put("/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: int,
    payload: RoleUpdate,
    admin: AdminUserDep,
    db: SessionDep,
) -> UserResponse:
    """Change a user's role. Admin only."""
    user = user_service.update_user_role(db, user_id, payload.role)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/stats")
async def get_user_stats(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Activity counts for a user and the votes their content has received."""
    return {"success": True, "stats": user_service.get_user_stats(db, user_id)}
