from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from authgate.core.core import Service
from authgate.core.modules.role.models import RoleName
from authgate.core.modules.user.models import User, UserView
from authgate.core.modules.user.validators import MAX_PASSWORD_BYTES, normalize_email, validate_password
from authgate.errors import AccountNotFoundError, DuplicateEmailError
from authgate.utils import now, redact_email

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Credential store: user records, password hashes and activation state."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        await self._collection.create_index([("email", 1)], unique=True)

    async def find_user(self, user_id: UUID) -> User | None:
        return User.from_mongo(await self._collection.find_one({"_id": user_id}))

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID, raising AccountNotFoundError when absent."""
        user = await self.find_user(user_id)
        if user is None:
            raise AccountNotFoundError
        return user

    async def find_user_by_email(self, email: str) -> User | None:
        return User.from_mongo(await self._collection.find_one({"email": email.strip().lower()}))

    async def validate_user_email(self, email: str) -> None:
        """Raise DuplicateEmailError if the email is already registered."""
        if await self.find_user_by_email(email) is not None:
            raise DuplicateEmailError(email)

    async def create_user(self, email: str, password: str, full_name: str, verification_token: str) -> User:
        """Create an inactive user holding a pending verification token."""
        email = normalize_email(email)
        validate_password(password)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        role = self.core.services.role.get_role_by_name(RoleName.USER)
        user = User(
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            is_active=False,
            verification_token=verification_token,
            role_id=role.id,
        )
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            # Concurrent sign-up with the same email won the race past validate_user_email
            raise DuplicateEmailError(email) from e
        logger.info("user_created", user_id=user.id, email=redact_email(email))
        return user

    def verify_password(self, user: User, password: str) -> bool:
        """Verify password against stored hash."""
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, user.password_hash.encode("utf-8"))

    async def activate_user(self, user_id: UUID, verification_token: str) -> User | None:
        """Activate the user and consume its verification token in one atomic update.

        Returns None if the stored token changed since it was checked.
        """
        doc = await self._collection.find_one_and_update(
            {"_id": user_id, "verification_token": verification_token},
            {"$set": {"is_active": True, "verification_token": None, "updated_at": now()}},
            return_document=ReturnDocument.AFTER,
        )
        return User.from_mongo(doc)

    async def get_profile(self, user_id: UUID) -> UserView | None:
        """Load the user together with its role, or None if absent."""
        user = await self.find_user(user_id)
        if user is None:
            return None
        return UserView.from_domain(user, self.core.services.role.find_role(user.role_id))
