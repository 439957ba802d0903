"""SQLAlchemy model for the posts table."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.infrastructure.persistence.database import Base
from hospeda.infrastructure.persistence.models.mixins import AuditMixin


class PostModel(AuditMixin, Base):
    """An editorial post. News posts expire at ``expires_at``."""

    __tablename__ = "posts"

    author_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(260), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    summary: Mapped[str | None] = mapped_column(String(500), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_news: Mapped[bool] = mapped_column(default=False, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_featured: Mapped[bool] = mapped_column(default=False, nullable=False)
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    @property
    def owner_id(self) -> str | None:
        return self.author_id

    def __repr__(self) -> str:
        return f"<PostModel(id={self.id}, slug={self.slug})>"
