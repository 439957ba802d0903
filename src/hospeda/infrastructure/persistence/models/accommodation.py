"""SQLAlchemy model for the accommodations table."""

from typing import Any

from sqlalchemy import JSON, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class AccommodationModel(AuditMixin, Base):
    """A lodging listed by a host.

    Attributes:
        owner_id: Host user that owns the listing.
        destination_id: Destination the accommodation belongs to.
        type: Accommodation type (HOTEL, CABIN, APARTMENT, ...).
        price: Base nightly price.
        reviews_count: Number of live reviews.
        rating: Average score per rating dimension.
        average_rating: Mean of the dimension averages.
    """

    __tablename__ = "accommodations"

    owner_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        index=True,
        comment="Owning user (host)",
    )
    destination_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("destinations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    summary: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="ARS", nullable=False)
    is_featured: Mapped[bool] = mapped_column(default=False, nullable=False)
    reviews_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rating: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    def __repr__(self) -> str:
        return f"<AccommodationModel(id={self.id}, slug={self.slug}, owner_id={self.owner_id})>"
