"""SQLAlchemy models for accommodation and destination reviews.

Reviews store their scores as a JSON mapping of rating dimension to score.
The reviewing user is the review's owner.
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class AccommodationReviewModel(AuditMixin, Base):
    """A user's review of an accommodation."""

    __tablename__ = "accommodation_reviews"

    accommodation_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accommodations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    @property
    def owner_id(self) -> str:
        return self.user_id

    def __repr__(self) -> str:
        return f"<AccommodationReviewModel(id={self.id}, accommodation_id={self.accommodation_id})>"


class DestinationReviewModel(AuditMixin, Base):
    """A user's review of a destination."""

    __tablename__ = "destination_reviews"

    destination_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("destinations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    @property
    def owner_id(self) -> str:
        return self.user_id

    def __repr__(self) -> str:
        return f"<DestinationReviewModel(id={self.id}, destination_id={self.destination_id})>"
