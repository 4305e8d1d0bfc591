from uuid import UUID

import structlog

from authgate.core.core import Service
from authgate.core.modules.auth.models import RefreshResult, SignInResult, SignUpForm, SignUpResult
from authgate.core.modules.session.models import ClientInfo
from authgate.core.modules.token.models import AccessPayload
from authgate.core.modules.user.models import User, UserView
from authgate.errors import (
    AccountInvalidError,
    AccountNotFoundError,
    AccountNotVerifiedError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidVerificationError,
    UnauthorizedError,
)
from authgate.utils import normalize_ip, redact_email

logger = structlog.get_logger(__name__)


class AuthService(Service):
    """Sign-up, sign-in, session verification, email verification and logout.

    A signed access token is only trusted while the session registry still
    holds it for that user: logging out or signing in again on the same device
    makes the previous token unverifiable before it expires.
    """

    async def sign_up(self, form: SignUpForm) -> SignUpResult:
        """Register an inactive account and queue its verification email."""
        services = self.core.services
        await services.user.validate_user_email(form.email)

        verification_token = services.verification.create_verification_token()
        user = await services.user.create_user(form.email, form.password, form.full_name, verification_token)

        services.mail.send_account_register(user.email, user.full_name, verification_token)

        return SignUpResult(
            message="registration is successful, check your email for the next steps",
            data=UserView.from_domain(user, services.role.find_role(user.role_id)),
        )

    async def sign_in(self, client: ClientInfo, email: str, password: str) -> SignInResult:
        """Check credentials, then issue tokens and bind a session to the client's device."""
        services = self.core.services
        user = await services.user.find_user_by_email(email)
        if user is None:
            raise AccountNotFoundError

        if not user.is_active:
            raise AccountNotVerifiedError

        if not services.user.verify_password(user, password):
            raise InvalidCredentialsError

        access_token = services.token.issue_access_token(user.id)
        refresh_token, refresh_expires_at = services.token.issue_refresh_token(user.id)

        await services.refresh_token.create(user.id, refresh_token, refresh_expires_at)
        try:
            await services.session.create_or_update(
                user.id, access_token, normalize_ip(client.ip_address), client.device, client.platform
            )
        except BaseException:
            # Cancellation included: a refresh token without a session cannot be logged out
            await services.refresh_token.delete_token(user.id, refresh_token)
            raise

        services.workspace.provision(user.id)

        logger.info("user_signed_in", user_id=user.id, device=client.device, platform=client.platform)
        return SignInResult(
            message="Login successfully",
            access_token=access_token,
            expires_in=services.token.access_ttl,
            refresh_token=refresh_token,
            user=AccessPayload(uid=str(user.id)),
        )

    def authenticate(self, token: str) -> AccessPayload:
        """Check an access token's signature and expiry only."""
        return self.core.services.token.verify_access_token(token)

    async def verify_session(self, user_id: UUID, token: str) -> UserView | None:
        """Return the profile if token is the live session token of user_id.

        Raises:
            SessionNotFoundError: token was superseded, logged out, or never issued
            InvalidTokenError: the stored token no longer verifies
        """
        session = await self.core.services.session.find_by_token_user(user_id, token)
        payload = self.core.services.token.verify_access_token(session.token)
        if not payload.uid:
            return None
        return await self.core.services.user.get_profile(UUID(payload.uid))

    async def verify_email(self, email: str, token: str) -> User:
        """Activate the account if token matches the pending verification token.

        The stored token is consumed, so repeating the call fails with AccountInvalidError.
        """
        services = self.core.services
        user = await services.user.find_user_by_email(email)
        if user is None:
            raise AccountNotFoundError

        if not user.verification_token:
            raise AccountInvalidError

        if not services.verification.check(user.verification_token, token):
            raise InvalidVerificationError

        activated = await services.user.activate_user(user.id, user.verification_token)
        if activated is None:
            # Consumed by a concurrent verification between the read and the update
            raise AccountInvalidError
        logger.info("user_email_verified", user_id=user.id, email=redact_email(user.email))
        return activated

    async def profile(self, user_id: UUID) -> UserView | None:
        return await self.core.services.user.get_profile(user_id)

    async def logout(self, user_id: UUID, payload: AccessPayload, token: str) -> str:
        """End the session for token and revoke every refresh token of the user."""
        if payload.uid != str(user_id):
            raise UnauthorizedError

        user = await self.core.services.user.get_user(user_id)

        await self.core.services.refresh_token.delete(user.id)
        await self.core.services.session.delete_by_token_user(user.id, token)

        logger.info("user_logged_out", user_id=user.id)
        return "You have logged out of the application"

    async def refresh(self, client: ClientInfo, refresh_token: str) -> RefreshResult:
        """Issue a new access token for the client's device from a live refresh token."""
        services = self.core.services
        payload = services.token.verify_refresh_token(refresh_token)
        user_id = UUID(payload.uid)

        if not await services.refresh_token.exists(user_id, refresh_token):
            raise InvalidTokenError("refresh token has been revoked")

        user = await services.user.get_user(user_id)
        if not user.is_active:
            raise AccountNotVerifiedError

        access_token = services.token.issue_access_token(user.id)
        await services.session.create_or_update(
            user.id, access_token, normalize_ip(client.ip_address), client.device, client.platform
        )

        logger.info("access_token_refreshed", user_id=user.id, device=client.device)
        return RefreshResult(access_token=access_token, expires_in=services.token.access_ttl)
