from typing import Self

from pydantic import model_validator
from pydantic_settings import BaseSettings

from authgate.utils import parse_duration


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including the database name, e.g. mongodb://localhost/authgate
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    access_token_secret: str
    refresh_token_secret: str
    access_token_expires: str = "1d"  # ms-style duration: 30s, 15m, 12h, 1d, 2w, 1y or bare seconds
    refresh_token_expires: str = "30d"
    uploads_path: str = "./public/uploads"  # Root for per-user directories provisioned on sign-in
    frontend_url: str = "http://localhost:3000"  # Used to build links in outgoing emails
    cors_origins: list[str] = []
    smtp_host: str | None = None  # Emails are only logged when unset
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    mail_from: str = "no-reply@authgate.local"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "AUTHGATE_",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def check_token_settings(self) -> Self:
        if self.access_token_secret == self.refresh_token_secret:
            raise ValueError("access_token_secret and refresh_token_secret must differ")
        parse_duration(self.access_token_expires)
        parse_duration(self.refresh_token_expires)
        return self

    @property
    def access_token_ttl(self) -> int:
        """Access token lifetime in seconds."""
        return parse_duration(self.access_token_expires)

    @property
    def refresh_token_ttl(self) -> int:
        """Refresh token lifetime in seconds."""
        return parse_duration(self.refresh_token_expires)
