"""Tests for the credential store."""

from uuid import uuid4

import pytest

from authgate.errors import AccountNotFoundError, DuplicateEmailError, ValidationError


@pytest.fixture
def users(core):
    return core.services.user


class TestUserService:
    async def test_create_user_normalizes_email(self, users):
        user = await users.create_user("  Carol@Example.COM ", "long-enough", "Carol", "token")
        assert user.email == "carol@example.com"
        assert (await users.find_user_by_email("carol@example.com")).id == user.id

    async def test_default_role_assigned(self, users, core):
        user = await users.create_user("carol@example.com", "long-enough", "Carol", "token")
        assert core.services.role.find_role(user.role_id).name == "user"

    async def test_validate_user_email(self, users):
        await users.create_user("carol@example.com", "long-enough", "Carol", "token")
        with pytest.raises(DuplicateEmailError):
            await users.validate_user_email("carol@example.com")

    async def test_password_with_whitespace_rejected(self, users):
        with pytest.raises(ValidationError, match="whitespace"):
            await users.create_user("carol@example.com", "has a space", "Carol", "token")

    async def test_password_over_bcrypt_limit_rejected(self, users):
        """Test that passwords longer than 72 UTF-8 bytes fail validation instead of reaching bcrypt."""
        with pytest.raises(ValidationError, match="72 bytes"):
            await users.create_user("carol@example.com", "x" * 80, "Carol", "token")
        with pytest.raises(ValidationError, match="72 bytes"):
            await users.create_user("carol@example.com", "\u00e9" * 40, "Carol", "token")

    async def test_password_at_bcrypt_limit_accepted(self, users):
        user = await users.create_user("carol@example.com", "x" * 72, "Carol", "token")
        assert users.verify_password(user, "x" * 72)

    async def test_verify_overlong_password_is_false(self, users):
        user = await users.create_user("carol@example.com", "long-enough", "Carol", "token")
        assert users.verify_password(user, "x" * 80) is False

    async def test_get_user_missing(self, users):
        with pytest.raises(AccountNotFoundError):
            await users.get_user(uuid4())

    async def test_activate_requires_current_token(self, users):
        """Test that activation only applies while the given token is still stored."""
        user = await users.create_user("carol@example.com", "long-enough", "Carol", "token")
        assert await users.activate_user(user.id, "other") is None

        activated = await users.activate_user(user.id, "token")
        assert activated.is_active is True
        assert activated.verification_token is None
        assert await users.activate_user(user.id, "token") is None


class TestRoles:
    async def test_default_roles_seeded(self, core):
        assert core.services.role.get_role_by_name("user").name == "user"
        assert core.services.role.get_role_by_name("admin").name == "admin"

    async def test_seeding_is_idempotent(self, core, database):
        """Test that restarting does not duplicate roles."""
        await core.services.role.on_start()
        assert len(database.get_collection("roles").documents) == 2
