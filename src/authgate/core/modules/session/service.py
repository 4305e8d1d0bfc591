from typing import Any
from uuid import UUID, uuid4

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from authgate.core.core import Service
from authgate.core.modules.session.models import Session
from authgate.errors import SessionNotFoundError
from authgate.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Registry of live sessions, one per (user, device)."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        # One session per device; a repeat login overwrites it
        await self._collection.create_index([("user_id", 1), ("device", 1)], unique=True)
        await self._collection.create_index([("user_id", 1), ("token", 1)])
        # A session outliving its access token can never verify again
        await self._collection.create_index([("updated_at", 1)], expireAfterSeconds=self.core.config.access_token_ttl)

    async def create_or_update(
        self, user_id: UUID, token: str, ip_address: str | None, device: str, platform: str
    ) -> Session:
        """Upsert the session for (user_id, device), replacing token, ip and platform."""
        timestamp = now()
        query = {"user_id": user_id, "device": device}
        update = {
            "$set": {"token": token, "ip_address": ip_address, "platform": platform, "updated_at": timestamp},
            "$setOnInsert": {"_id": uuid4(), "created_at": timestamp},
        }
        try:
            doc = await self._upsert(query, update)
        except DuplicateKeyError:
            # A concurrent login on the same device inserted first; ours now applies as an update
            doc = await self._upsert(query, update)
        logger.debug("session_upserted", user_id=user_id, device=device, platform=platform)
        return Session.model_validate(doc)

    async def find_by_token_user(self, user_id: UUID, token: str) -> Session:
        """Get the live session holding this access token, or raise SessionNotFoundError."""
        session = Session.from_mongo(await self._collection.find_one({"user_id": user_id, "token": token}))
        if session is None:
            raise SessionNotFoundError
        return session

    async def delete_by_token_user(self, user_id: UUID, token: str) -> None:
        result = await self._collection.delete_one({"user_id": user_id, "token": token})
        logger.debug("session_deleted", user_id=user_id, deleted=result.deleted_count)

    async def _upsert(self, query: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
        doc = await self._collection.find_one_and_update(query, update, upsert=True, return_document=ReturnDocument.AFTER)
        if doc is None:
            raise RuntimeError("Session upsert returned no document")
        return doc
