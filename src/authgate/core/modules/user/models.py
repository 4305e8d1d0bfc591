from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from authgate.core.db import MongoModel
from authgate.core.modules.role.models import Role, RoleView
from authgate.utils import now


class User(MongoModel):
    """User domain model with credentials and activation state.

    Indexed on email - unique.
    """

    email: str  # stored lower-cased
    full_name: str = ""
    password_hash: str  # bcrypt hash
    is_active: bool = False
    verification_token: str | None = None  # pending email verification token, cleared on activation
    role_id: UUID | None = None
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    full_name: str = Field(..., description="Display name")
    is_active: bool = Field(..., description="Whether the email address has been verified")
    role: RoleView | None = Field(None, description="Assigned role")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_domain(cls, user: User, role: Role | None = None) -> "UserView":
        """Create view model from domain model."""
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            is_active=user.is_active,
            role=RoleView.from_domain(role) if role else None,
            created_at=user.created_at,
        )
