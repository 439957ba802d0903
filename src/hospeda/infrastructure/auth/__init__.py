"""Authentication infrastructure components.

This module provides the JWT token service and the per-request actor
resolver.
"""

from hospeda.infrastructure.auth.actor_resolver import ActorResolver, extract_bearer_token
from hospeda.infrastructure.auth.jwt_service import (
    AccessTokenClaims,
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
)

__all__ = [
    "AccessTokenClaims",
    "ActorResolver",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenExpiredError",
    "extract_bearer_token",
]
