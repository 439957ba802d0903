"""SQLAlchemy model for the role_permissions table.

Many-to-many assignment between roles and permissions, resolved once per
actor at authentication time.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base


class RolePermissionModel(Base):
    """Assignment of one permission to one role."""

    __tablename__ = "role_permissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="Role name",
    )
    permission: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Dotted permission name",
    )

    __table_args__ = (
        UniqueConstraint("role", "permission", name="uq_role_permissions_role_permission"),
    )

    def __repr__(self) -> str:
        return f"<RolePermissionModel(role={self.role}, permission={self.permission})>"
