from datetime import datetime, timedelta
from uuid import UUID

from authgate.core.core import Service
from authgate.core.modules.token.codec import TokenCodec
from authgate.core.modules.token.models import AccessPayload, RefreshPayload, VerificationPayload
from authgate.utils import now


class TokenService(Service):
    """Mints and checks access, refresh and verification tokens.

    Access and verification tokens share the access secret; refresh tokens
    use their own, so neither class verifies as the other.
    """

    _access_codec: TokenCodec
    _refresh_codec: TokenCodec

    async def on_start(self) -> None:
        self._access_codec = TokenCodec(self.core.config.access_token_secret)
        self._refresh_codec = TokenCodec(self.core.config.refresh_token_secret)

    @property
    def access_ttl(self) -> int:
        return self.core.config.access_token_ttl

    @property
    def refresh_ttl(self) -> int:
        return self.core.config.refresh_token_ttl

    def issue_access_token(self, user_id: UUID) -> str:
        return self._access_codec.sign(AccessPayload(uid=str(user_id)), self.access_ttl)

    def issue_refresh_token(self, user_id: UUID) -> tuple[str, datetime]:
        """Return the refresh token and the moment it expires."""
        expires_at = now() + timedelta(seconds=self.refresh_ttl)
        return self._refresh_codec.sign(RefreshPayload(uid=str(user_id)), self.refresh_ttl), expires_at

    def issue_verification_token(self, code: str) -> str:
        return self._access_codec.sign(VerificationPayload(code=code), self.access_ttl)

    def verify_access_token(self, token: str) -> AccessPayload:
        return self._access_codec.verify(token, AccessPayload)

    def verify_refresh_token(self, token: str) -> RefreshPayload:
        return self._refresh_codec.verify(token, RefreshPayload)
