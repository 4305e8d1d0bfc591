from typing import Annotated, cast
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authgate.app import App
from authgate.core.modules.session.models import ClientInfo
from authgate.core.modules.token.models import AccessPayload
from authgate.errors import AuthenticationError, InvalidTokenError
from authgate.web.user_agent import current_device, current_platform

bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_client_info(request: Request) -> ClientInfo:
    """Collect IP, device and platform of the caller."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip_address: str | None = forwarded_for.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    return ClientInfo(ip_address=ip_address, device=current_device(user_agent), platform=current_platform(user_agent))


async def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> str:
    """Get the raw token from the Authorization Bearer header."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Missing bearer token")
    return credentials.credentials


async def get_token_payload(app: Annotated[App, Depends(get_app)], token: Annotated[str, Depends(get_bearer_token)]) -> AccessPayload:
    """Verify the bearer token's signature and expiry."""
    return app.authenticate(token)


async def get_current_user_id(
    app: Annotated[App, Depends(get_app)],
    token: Annotated[str, Depends(get_bearer_token)],
    payload: Annotated[AccessPayload, Depends(get_token_payload)],
) -> UUID:
    """Require the bearer token to be the live session token of its user."""
    user_id = user_id_from_payload(payload)
    if await app.verify_session(user_id, token) is None:
        raise AuthenticationError
    return user_id


def user_id_from_payload(payload: AccessPayload) -> UUID:
    try:
        return UUID(payload.uid)
    except ValueError as e:
        raise InvalidTokenError("token does not identify a user") from e


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ClientInfoDep = Annotated[ClientInfo, Depends(get_client_info)]
BearerTokenDep = Annotated[str, Depends(get_bearer_token)]
TokenPayloadDep = Annotated[AccessPayload, Depends(get_token_payload)]
CurrentUserIdDep = Annotated[UUID, Depends(get_current_user_id)]
