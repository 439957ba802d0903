"""SQLAlchemy model for the users table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.domain.entities.role import Role
from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class UserModel(AuditMixin, Base):
    """A platform user.

    Attributes:
        email: Unique email address.
        display_name: Public name.
        role: Role name (see ``hospeda.domain.entities.role.Role``).
        is_active: False when the account is disabled.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.USER.value)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    @property
    def owner_id(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role})>"
