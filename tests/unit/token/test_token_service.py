"""Tests for access/refresh token separation."""

import pytest

from authgate.errors import InvalidTokenError
from authgate.utils import now


class TestTokenService:
    async def test_access_token_round_trip(self, core):
        """Test that an access token verifies with the access secret."""
        user_id = "6f1c5d1e-3f53-4cbb-9a0e-0fbc1c1f4a11"
        token = core.services.token.issue_access_token(user_id)
        assert core.services.token.verify_access_token(token).uid == user_id

    async def test_access_token_fails_as_refresh(self, core):
        """Test that an access token is rejected by the refresh verifier."""
        token = core.services.token.issue_access_token("u")
        with pytest.raises(InvalidTokenError):
            core.services.token.verify_refresh_token(token)

    async def test_refresh_token_fails_as_access(self, core):
        """Test that a refresh token is rejected by the access verifier."""
        token, _ = core.services.token.issue_refresh_token("u")
        with pytest.raises(InvalidTokenError):
            core.services.token.verify_access_token(token)

    async def test_refresh_expiry_matches_config(self, core):
        """Test that the returned expiry is about refresh_token_ttl away."""
        _, expires_at = core.services.token.issue_refresh_token("u")
        remaining = (expires_at - now()).total_seconds()
        assert 30 * 24 * 3600 - 5 < remaining <= 30 * 24 * 3600

    async def test_verification_token_is_not_an_access_token(self, core):
        """Test that a verification token signed with the access secret cannot open a session."""
        token = core.services.token.issue_verification_token("code")
        with pytest.raises(InvalidTokenError):
            core.services.token.verify_access_token(token)
