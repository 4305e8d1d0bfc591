"""Session management models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from authgate.core.db import MongoModel
from authgate.utils import now


class ClientInfo(BaseModel):
    """Where a request came from, as far as session scoping is concerned."""

    ip_address: str | None = None
    device: str = "unknown"
    platform: str = "unknown"


class Session(MongoModel):
    """Authenticated device context holding the current access token.

    Indexed on (user_id, device) - unique, (user_id, token),
    updated_at (TTL of the access token lifetime).
    """

    user_id: UUID
    token: str
    ip_address: str | None = None
    device: str
    platform: str
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
