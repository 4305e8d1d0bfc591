"""Signed token payload shapes."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class TokenPayload(BaseModel):
    """Claims carried inside a signed token, besides iat/exp."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class AccessPayload(TokenPayload):
    kind: Literal["access"] = "access"
    uid: str


class RefreshPayload(TokenPayload):
    kind: Literal["refresh"] = "refresh"
    uid: str


class VerificationPayload(TokenPayload):
    kind: Literal["verification"] = "verification"
    code: str


AnyTokenPayload = Annotated[AccessPayload | RefreshPayload | VerificationPayload, Field(discriminator="kind")]

token_payload_adapter: TypeAdapter[AccessPayload | RefreshPayload | VerificationPayload] = TypeAdapter(AnyTokenPayload)
