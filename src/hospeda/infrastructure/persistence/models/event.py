"""SQLAlchemy model for the events table."""

from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class EventModel(AuditMixin, Base):
    """A local event (festival, concert, fair...)."""

    __tablename__ = "events"

    author_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    summary: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    ends_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(2), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True, comment="NULL for free events")
    is_featured: Mapped[bool] = mapped_column(default=False, nullable=False)

    @property
    def owner_id(self) -> str | None:
        return self.author_id

    def __repr__(self) -> str:
        return f"<EventModel(id={self.id}, slug={self.slug})>"
