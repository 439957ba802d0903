"""SQLAlchemy model for the tags table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class TagModel(AuditMixin, Base):
    """A label attached to accommodations, destinations, events or posts."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(60), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(300), nullable=True)

    def __repr__(self) -> str:
        return f"<TagModel(id={self.id}, name={self.name})>"
