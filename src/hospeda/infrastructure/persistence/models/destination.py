"""SQLAlchemy model for the destinations table."""

from typing import Any

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class DestinationModel(AuditMixin, Base):
    """A tourist destination (city, town or region).

    Review aggregates (``reviews_count``, ``rating``, ``average_rating``)
    are maintained by the destination review service.
    """

    __tablename__ = "destinations"

    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(160), nullable=False, unique=True)
    summary: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    country: Mapped[str | None] = mapped_column(String(2), nullable=True, index=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_featured: Mapped[bool] = mapped_column(default=False, nullable=False)
    accommodations_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    reviews_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rating: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    def __repr__(self) -> str:
        return f"<DestinationModel(id={self.id}, slug={self.slug})>"
