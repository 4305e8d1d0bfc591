from typing import Literal

from pydantic import BaseModel, Field

from authgate.core.modules.token.models import AccessPayload
from authgate.core.modules.user.models import UserView

TOKEN_TYPE = "Bearer"


class SignUpForm(BaseModel):
    """Attributes of a new account."""

    email: str = Field(..., min_length=3, description="Email address, used to sign in")
    password: str = Field(..., min_length=1, description="Password")
    full_name: str = Field("", description="Display name")


class SignUpResult(BaseModel):
    message: str = Field(..., description="Human-readable outcome")
    data: UserView = Field(..., description="Created account")


class SignInResult(BaseModel):
    message: str = Field(..., description="Human-readable outcome")
    access_token: str = Field(..., description="Bearer token for subsequent requests")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    token_type: Literal["Bearer"] = Field(TOKEN_TYPE, description="Always 'Bearer'")
    refresh_token: str = Field(..., description="Long-lived token used to renew the access token")
    user: AccessPayload = Field(..., description="Payload carried by the access token")


class RefreshResult(BaseModel):
    access_token: str = Field(..., description="New bearer token")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    token_type: Literal["Bearer"] = Field(TOKEN_TYPE, description="Always 'Bearer'")
