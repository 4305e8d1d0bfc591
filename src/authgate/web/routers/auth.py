from fastapi import APIRouter
from pydantic import BaseModel, Field

from authgate.core.modules.auth.models import RefreshResult, SignInResult, SignUpForm, SignUpResult
from authgate.core.modules.user.models import UserView
from authgate.web.deps import AppDep, BearerTokenDep, ClientInfoDep, TokenPayloadDep, user_id_from_payload
from authgate.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class SignInRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., min_length=1, description="Email address of the account")
    password: str = Field(..., min_length=1, description="Password of the account")


class VerifyEmailRequest(BaseModel):
    """Email verification request, built from the link sent on sign-up."""

    email: str = Field(..., min_length=1, description="Email address of the account")
    token: str = Field(..., min_length=1, description="Verification token from the email")


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token returned by sign-in")


@router.post(
    "/auth/sign-up",
    summary="Register account",
    description="Create an inactive account and send a verification email.",
    operation_id="signUp",
    status_code=201,
    responses={
        201: {"description": "Account created, pending email verification"},
        400: {"model": ErrorResponse, "description": "Email already registered or invalid input"},
    },
)
async def sign_up(form: SignUpForm, app: AppDep) -> SignUpResult:
    return await app.sign_up(form)


@router.post(
    "/auth/sign-in",
    summary="Authenticate user",
    description="Authenticate with email and password to receive access and refresh tokens.",
    operation_id="signIn",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Wrong password or email not verified"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
)
async def sign_in(request: SignInRequest, app: AppDep, client: ClientInfoDep) -> SignInResult:
    return await app.sign_in(client, request.email, request.password)


@router.get(
    "/auth/verify-session",
    summary="Verify session",
    description="Check that the bearer token is the live session token of its user and return the profile.",
    operation_id="verifySession",
    responses={
        200: {"description": "Session is live"},
        401: {"model": ErrorResponse, "description": "Token invalid or expired"},
        404: {"model": ErrorResponse, "description": "Session ended or superseded"},
    },
)
async def verify_session(app: AppDep, token: BearerTokenDep, payload: TokenPayloadDep) -> UserView | None:
    return await app.verify_session(user_id_from_payload(payload), token)


@router.post(
    "/auth/verify-email",
    summary="Verify email",
    description="Activate the account with the token sent by email.",
    operation_id="verifyEmail",
    responses={
        200: {"description": "Account activated"},
        400: {"model": ErrorResponse, "description": "Token does not match"},
        404: {"model": ErrorResponse, "description": "Account not found or already verified"},
    },
)
async def verify_email(request: VerifyEmailRequest, app: AppDep) -> UserView:
    return await app.verify_email(request.email, request.token)


@router.post(
    "/auth/refresh-token",
    summary="Renew access token",
    description="Exchange a refresh token for a new access token bound to the calling device.",
    operation_id="refreshToken",
    responses={
        200: {"description": "New access token issued"},
        401: {"model": ErrorResponse, "description": "Refresh token invalid, expired or revoked"},
    },
)
async def refresh_token(request: RefreshTokenRequest, app: AppDep, client: ClientInfoDep) -> RefreshResult:
    return await app.refresh(client, request.refresh_token)
