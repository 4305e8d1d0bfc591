from enum import StrEnum

from pydantic import BaseModel, Field

from authgate.core.db import MongoModel


class RoleName(StrEnum):
    """Roles seeded on startup."""

    USER = "user"
    ADMIN = "admin"


class Role(MongoModel):
    """Named role referenced by users. Indexed on name - unique."""

    name: str


class RoleView(BaseModel):
    """Role as embedded in user profiles."""

    id: str = Field(..., description="Role ID")
    name: str = Field(..., description="Role name")

    @classmethod
    def from_domain(cls, role: Role) -> "RoleView":
        return cls(id=str(role.id), name=role.name)
