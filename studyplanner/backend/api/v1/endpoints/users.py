"""
Users API Endpoints.

Registration after sign-up with the identity provider, and the
identity behind the current token.
"""

from fastapi import APIRouter

from studyplanner.backend.core.config import get_app_config
from studyplanner.backend.core.dependencies import CurrentIdentity, DbSession
from studyplanner.backend.core.exceptions import AuthorizationError
from studyplanner.backend.schemas.base import ApiResponse
from studyplanner.backend.schemas.user import (
    CurrentUserResponse,
    UserRegister,
    UserResponse,
)
from studyplanner.backend.services.user import UserService

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=201,
    summary="Register a user",
)
async def register_user(
    data: UserRegister,
    db: DbSession,
) -> ApiResponse[UserResponse]:
    """Store the registration record for a new identity."""
    if not get_app_config().features.registration_enabled:
        raise AuthorizationError("Registration is disabled")

    service = UserService(db)
    user = await service.register(data)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.get(
    "/me",
    response_model=ApiResponse[CurrentUserResponse],
    summary="Current user",
)
async def get_current_user(
    identity: CurrentIdentity,
) -> ApiResponse[CurrentUserResponse]:
    """Return the identity resolved from the bearer token."""
    return ApiResponse(
        data=CurrentUserResponse(
            id=identity.user_id,
            email=identity.email,
            name=identity.name,
        )
    )
