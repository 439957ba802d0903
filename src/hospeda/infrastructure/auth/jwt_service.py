"""JWT access tokens.

Tokens carry the user ID and role the actor is resolved from. They are
signed with HS256 under the configured secret and issued by ``hospeda``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from hospeda.core.config import get_settings
from hospeda.domain.entities.role import Role


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


@dataclass(frozen=True)
class AccessTokenClaims:
    """Claims of a validated access token.

    ``role`` is kept as sent; the resolver decides what an unknown role means.
    """

    user_id: str
    role: str
    issued_at: datetime | None
    expires_at: datetime | None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AccessTokenClaims":
        return cls(
            user_id=str(payload["user_id"]),
            role=str(payload["role"]),
            issued_at=_timestamp(payload.get("iat")),
            expires_at=_timestamp(payload.get("exp")),
        )


def _timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


class JWTService:
    """Issue and validate access tokens.

    Args:
        secret_key: Signing secret. Defaults to the configured secret key.
    """

    ALGORITHM = "HS256"
    ISSUER = "hospeda"
    TOKEN_TYPE = "access"

    def __init__(self, secret_key: str | None = None) -> None:
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        return self._secret_key or get_settings().secret_key

    def create_access_token(
        self,
        user_id: str,
        role: Role | str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token for a user acting under ``role``.

        Args:
            user_id: The user's unique identifier.
            role: The user's role.
            expires_delta: Token lifetime. Defaults to
                ``access_token_expire_minutes``.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)

        issued_at = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + expires_delta,
            "user_id": user_id,
            "role": role.value if isinstance(role, Role) else role,
            "type": self.TOKEN_TYPE,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode a token and check its signature, expiry and issuer.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_access_token(self, token: str) -> AccessTokenClaims:
        """Decode an access token into its claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid, is not an access
                token or carries no user or role.
        """
        payload = self.decode_token(token)
        if payload.get("type") != self.TOKEN_TYPE:
            raise InvalidTokenError("Not an access token")
        if not payload.get("user_id") or not payload.get("role"):
            raise InvalidTokenError("Token is missing required claims")
        return AccessTokenClaims.from_payload(payload)
