from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from authgate.core.core import Service
from authgate.core.modules.refresh_token.models import RefreshToken

logger = structlog.get_logger(__name__)


class RefreshTokenService(Service):
    """Append-only store of refresh tokens, revoked per user."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("refresh_tokens")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("token", 1)])
        # MongoDB drops each row once its expires_at has passed
        await self._collection.create_index([("expires_at", 1)], expireAfterSeconds=0)

    async def create(self, user_id: UUID, token: str, expires_at: datetime) -> RefreshToken:
        """Store a new refresh token; tokens issued earlier stay valid."""
        refresh_token = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
        await self._collection.insert_one(refresh_token.to_mongo())
        return refresh_token

    async def exists(self, user_id: UUID, token: str) -> bool:
        return await self._collection.count_documents({"user_id": user_id, "token": token}, limit=1) > 0

    async def delete(self, user_id: UUID) -> int:
        """Revoke every refresh token of the user and return how many were removed."""
        result = await self._collection.delete_many({"user_id": user_id})
        logger.debug("refresh_tokens_revoked", user_id=user_id, count=result.deleted_count)
        return result.deleted_count

    async def delete_token(self, user_id: UUID, token: str) -> None:
        await self._collection.delete_one({"user_id": user_id, "token": token})
