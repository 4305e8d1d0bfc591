from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from authgate.core.modules.user.models import UserView
from authgate.errors import AccountNotFoundError
from authgate.web.deps import AppDep, BearerTokenDep, CurrentUserIdDep, TokenPayloadDep
from authgate.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


class LogoutResponse(BaseModel):
    message: str = Field(..., description="Confirmation message")


@router.get(
    "/profile",
    summary="Get current user profile",
    description="Get the profile of the currently authenticated user.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Session ended or account removed"},
    },
)
async def get_profile(app: AppDep, user_id: CurrentUserIdDep) -> UserView:
    profile = await app.profile(user_id)
    if profile is None:
        raise AccountNotFoundError
    return profile


@router.post(
    "/logout/{user_id}",
    summary="End session",
    description="End the session of the bearer token and revoke all refresh tokens of the user.",
    operation_id="logout",
    responses={
        200: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Token invalid or belongs to another user"},
    },
)
async def logout(user_id: UUID, app: AppDep, token: BearerTokenDep, payload: TokenPayloadDep) -> LogoutResponse:
    return LogoutResponse(message=await app.logout(user_id, payload, token))
