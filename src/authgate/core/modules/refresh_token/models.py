from datetime import datetime
from uuid import UUID

from pydantic import Field

from authgate.core.db import MongoModel
from authgate.utils import now


class RefreshToken(MongoModel):
    """Issued refresh token.

    Indexed on (user_id, token), expires_at (TTL).
    """

    user_id: UUID
    token: str
    expires_at: datetime
    created_at: datetime = Field(default_factory=now)
