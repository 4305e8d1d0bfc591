import hmac
import secrets
import uuid

from authgate.core.core import Service


class VerificationService(Service):
    """One-time codes proving control of an email address."""

    def issue(self) -> str:
        """Generate a unique opaque code."""
        return f"{uuid.uuid4().hex}{secrets.token_hex(8)}"

    def create_verification_token(self) -> str:
        """Issue a code and wrap it as a signed verification token."""
        return self.core.services.token.issue_verification_token(self.issue())

    def check(self, stored_token: str | None, supplied_token: str) -> bool:
        """Compare tokens exactly, in constant time."""
        if not stored_token:
            return False
        return hmac.compare_digest(stored_token.encode("utf-8"), supplied_token.encode("utf-8"))
