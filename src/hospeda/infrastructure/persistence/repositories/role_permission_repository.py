"""Repository for role permission assignments."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hospeda.core.logging import get_logger
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.services.role_permissions import DEFAULT_ROLE_PERMISSIONS
from hospeda.infrastructure.persistence.models import RolePermissionModel

logger = get_logger(__name__)


class RolePermissionRepository:
    """Repository for role_permissions database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_permissions_for_role(self, role: Role | str) -> frozenset[Permission]:
        """Get the permissions assigned to a role.

        Stored permission names that are no longer known are skipped with a
        warning.

        Args:
            role: The role.

        Returns:
            The role's permission set (empty if nothing is assigned).
        """
        role_name = role.value if isinstance(role, Role) else role
        result = await self.session.execute(
            select(RolePermissionModel.permission).where(RolePermissionModel.role == role_name)
        )
        permissions: set[Permission] = set()
        for name in result.scalars().all():
            try:
                permissions.add(Permission.parse(name))
            except ValueError:
                logger.warning("Skipping unknown permission", role=role_name, permission=name)
        return frozenset(permissions)

    async def assign(self, role: Role, permission: Permission) -> RolePermissionModel:
        """Assign a permission to a role."""
        assignment = RolePermissionModel(role=role.value, permission=permission.value)
        self.session.add(assignment)
        await self.session.flush()
        return assignment

    async def seed_defaults(self) -> int:
        """Insert the default role permissions that are missing.

        Safe to run repeatedly.

        Returns:
            Number of assignments inserted.
        """
        result = await self.session.execute(
            select(RolePermissionModel.role, RolePermissionModel.permission)
        )
        existing = {(row.role, row.permission) for row in result.all()}

        inserted = 0
        for role, permissions in DEFAULT_ROLE_PERMISSIONS.items():
            for permission in sorted(permissions, key=lambda p: p.value):
                if (role.value, permission.value) in existing:
                    continue
                self.session.add(RolePermissionModel(role=role.value, permission=permission.value))
                inserted += 1

        if inserted:
            await self.session.flush()
            logger.info("Seeded role permissions", count=inserted)
        return inserted
