"""Column mixins shared by managed entity tables.

Every table served by a CRUD service carries the same audit, soft-delete,
lifecycle and visibility columns. Visibility and lifecycle are stored as
plain strings so that unexpected values survive a round trip and can be
rejected by the visibility rules instead of by the ORM.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from hospeda.domain.entities.visibility import LifecycleState, Visibility


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class AuditMixin:
    """Primary key, audit stamps, soft delete, lifecycle and visibility."""

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
        comment="Record ID (UUID)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
        comment="Soft-delete timestamp",
    )
    created_by_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        comment="Actor who created the record",
    )
    updated_by_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        comment="Actor who last updated the record",
    )
    deleted_by_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        comment="Actor who soft-deleted the record",
    )
    lifecycle_state: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=LifecycleState.ACTIVE.value,
        comment="ACTIVE, ARCHIVED or INACTIVE",
    )
    visibility: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=Visibility.PUBLIC.value,
        comment="PUBLIC, PRIVATE or DRAFT",
    )
