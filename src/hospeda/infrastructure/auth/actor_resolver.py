"""Resolve the calling actor from request credentials.

Every request gets an actor: callers without credentials, or with a bad
token, are served as the guest actor. Authenticated callers get their
role's permissions from the ``role_permissions`` table, falling back to the
built-in defaults when nothing is stored for the role.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from hospeda.core.logging import get_logger
from hospeda.domain.entities.actor import Actor, guest_actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.services.role_permissions import DEFAULT_ROLE_PERMISSIONS
from hospeda.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)
from hospeda.infrastructure.persistence.models import UserModel
from hospeda.infrastructure.persistence.repositories import RolePermissionRepository

logger = get_logger(__name__)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token of a ``Bearer`` authorization header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class ActorResolver:
    """Build the actor for one request.

    Args:
        session: Database session of the request.
        jwt_service: Token decoder.
    """

    def __init__(self, session: AsyncSession, jwt_service: JWTService) -> None:
        self.session = session
        self.jwt_service = jwt_service
        self._role_permissions = RolePermissionRepository(session)

    async def resolve(self, authorization: str | None) -> Actor:
        """Resolve the actor for an ``Authorization`` header value.

        Args:
            authorization: Raw header value, or None when absent.

        Returns:
            The authenticated actor, or the guest actor.
        """
        token = extract_bearer_token(authorization)
        if token is None:
            return guest_actor()

        try:
            claims = self.jwt_service.validate_access_token(token)
        except TokenExpiredError:
            logger.warning("Expired access token, continuing as guest")
            return guest_actor()
        except InvalidTokenError as e:
            logger.warning("Invalid access token, continuing as guest", error=str(e))
            return guest_actor()

        user_id = claims.user_id
        try:
            role = Role(claims.role)
        except ValueError:
            logger.warning("Token carries unknown role", user_id=user_id, role=claims.role)
            return guest_actor()

        is_active = True
        user = await self.session.get(UserModel, user_id)
        if user is not None:
            is_active = user.is_active and user.deleted_at is None
            # The stored role wins over the one in the token
            try:
                role = Role(user.role)
            except ValueError:
                logger.warning("User has unknown role", user_id=user_id, role=user.role)

        permissions = await self.permissions_for(role)
        actor = Actor(id=user_id, role=role, permissions=permissions, is_active=is_active)
        logger.debug(
            "Actor resolved",
            actor_id=user_id,
            role=role.value,
            is_active=is_active,
            permission_count=len(permissions),
        )
        return actor

    async def permissions_for(self, role: Role) -> frozenset[Permission]:
        """Permissions stored for a role, or its defaults when none are stored."""
        stored = await self._role_permissions.get_permissions_for_role(role)
        if stored:
            return stored
        return DEFAULT_ROLE_PERMISSIONS.get(role, frozenset())
