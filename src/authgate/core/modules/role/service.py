from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from authgate.core.core import Service
from authgate.core.modules.role.models import Role, RoleName
from authgate.errors import NotFoundError

logger = structlog.get_logger(__name__)


class RoleService(Service):
    """Keeps the small, rarely changing role table cached in memory."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("roles")
        self._roles: dict[UUID, Role] = {}

    def find_role(self, role_id: UUID | None) -> Role | None:
        if role_id is None:
            return None
        return self._roles.get(role_id)

    def get_role_by_name(self, name: str) -> Role:
        role = next((r for r in self._roles.values() if r.name == name), None)
        if role is None:
            raise NotFoundError(f"Role '{name}' not found")
        return role

    async def ensure_default_roles(self) -> None:
        """Insert any missing built-in role."""
        for name in RoleName:
            role = Role(name=name.value)
            await self._collection.update_one({"name": role.name}, {"$setOnInsert": role.to_mongo()}, upsert=True)

    async def update_roles_cache(self) -> None:
        roles = await Role.list_cursor(self._collection.find())
        self._roles = {role.id: role for role in roles}

    async def on_start(self) -> None:
        await self._collection.create_index([("name", 1)], unique=True)
        await self.ensure_default_roles()
        await self.update_roles_cache()
        logger.debug("role_service_started", role_count=len(self._roles))
