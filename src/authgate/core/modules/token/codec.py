import time
import uuid

import jwt
import pydantic

from authgate.core.modules.token.models import TokenPayload, token_payload_adapter
from authgate.errors import InvalidTokenError


class TokenCodec:
    """Signs and verifies HS256 JWTs with one secret.

    Stateless: a verified token only proves who signed it and that it has not
    expired. Whether it is still honoured is decided by the session and
    refresh token stores.
    """

    algorithm = "HS256"

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret

    def sign(self, payload: TokenPayload, ttl: int) -> str:
        """Encode payload with an expiry ttl seconds from now.

        Each token gets a random jti, so two tokens signed within the same
        second for the same payload still differ.
        """
        issued_at = int(time.time())
        claims = payload.model_dump() | {"iat": issued_at, "exp": issued_at + ttl, "jti": uuid.uuid4().hex}
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify[P: TokenPayload](self, token: str, payload_type: type[P]) -> P:
        """Decode token and return its payload if it has the expected kind.

        Raises:
            InvalidTokenError: bad signature, expired, malformed, or wrong kind
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.algorithm], options={"require": ["exp", "iat"]})
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError from e

        try:
            payload = token_payload_adapter.validate_python(claims)
        except pydantic.ValidationError as e:
            raise InvalidTokenError("token payload is malformed") from e

        if not isinstance(payload, payload_type):
            raise InvalidTokenError(f"expected a {payload_type.__name__}, got '{payload.kind}' token")
        return payload
