from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from authgate.config import Config
from authgate.core.core import Core
from authgate.core.modules.auth.models import RefreshResult, SignInResult, SignUpForm, SignUpResult
from authgate.core.modules.session.models import ClientInfo
from authgate.core.modules.token.models import AccessPayload
from authgate.core.modules.user.models import UserView


class App:
    """Facade over the authentication core, used by the web layer."""

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def sign_up(self, form: SignUpForm) -> SignUpResult:
        """Register a new account pending email verification."""
        return await self._core.services.auth.sign_up(form)

    async def sign_in(self, client: ClientInfo, email: str, password: str) -> SignInResult:
        """Authenticate with email and password and open a session for the client's device."""
        return await self._core.services.auth.sign_in(client, email, password)

    def authenticate(self, token: str) -> AccessPayload:
        """Verify an access token's signature and expiry."""
        return self._core.services.auth.authenticate(token)

    async def verify_session(self, user_id: UUID, token: str) -> UserView | None:
        """Check token is the live session token of user_id and return the profile."""
        return await self._core.services.auth.verify_session(user_id, token)

    async def verify_email(self, email: str, token: str) -> UserView:
        """Activate the account owning email."""
        user = await self._core.services.auth.verify_email(email, token)
        return UserView.from_domain(user, self._core.services.role.find_role(user.role_id))

    async def profile(self, user_id: UUID) -> UserView | None:
        return await self._core.services.auth.profile(user_id)

    async def logout(self, user_id: UUID, payload: AccessPayload, token: str) -> str:
        """End the current session and revoke the user's refresh tokens."""
        return await self._core.services.auth.logout(user_id, payload, token)

    async def refresh(self, client: ClientInfo, refresh_token: str) -> RefreshResult:
        """Exchange a refresh token for a new access token."""
        return await self._core.services.auth.refresh(client, refresh_token)
