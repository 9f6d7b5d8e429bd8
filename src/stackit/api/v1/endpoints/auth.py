"""Authentication endpoints for the StackIt API."""

from fastapi import APIRouter

from stackit.core.security import create_access_token
from stackit.schemas.user import LoginRequest, LoginResponse, UserResponse
from stackit.services import user_service
from stackit.services.errors import UnauthenticatedError

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange a username and password for a bearer token.

    Args:
        payload: Login credentials
        db: Database session

    Returns:
        The access token and the authenticated user

    Raises:
        UnauthenticatedError: If the credentials do not match an account
    """
    user = user_service.authenticate(db, payload.username, payload.password)
    if user is None:
        raise UnauthenticatedError("Invalid username or password")

    token = create_access_token(user.id, {"role": user.role})
    return LoginResponse(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentUserDep) -> UserResponse:
    """Return the account behind the bearer token."""
    return UserResponse.model_validate(current_user)
