"""Pydantic schemas for event endpoints."""

from datetime import datetime

from pydantic import Field, model_validator

from hospeda.domain.entities.enums import EventCategory
from hospeda.domain.entities.visibility import LifecycleState, Visibility
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class EventCreate(InputSchema):
    """Request body for creating an event."""

    name: str = Field(..., min_length=3, max_length=150)
    category: EventCategory
    summary: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    starts_at: datetime
    ends_at: datetime | None = None
    city: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, min_length=2, max_length=2)
    price: float | None = Field(default=None, ge=0, description="Omit for free events")
    is_featured: bool = False
    visibility: Visibility | None = None
    lifecycle_state: LifecycleState | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "EventCreate":
        """Ensure the event does not end before it starts."""
        if self.ends_at is None:
            return self
        if (self.ends_at.tzinfo is None) != (self.starts_at.tzinfo is None):
            raise ValueError("starts_at and ends_at must both be timezone-aware or both naive")
        if self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be before starts_at")
        return self


class EventUpdate(InputSchema):
    """Request body for updating an event. All fields are optional."""

    name: str | None = Field(default=None, min_length=3, max_length=150)
    category: EventCategory | None = None
    summary: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    city: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, min_length=2, max_length=2)
    price: float | None = Field(default=None, ge=0)
    is_featured: bool | None = None
    lifecycle_state: LifecycleState | None = None


class EventSearch(SearchSchema):
    """Search params for events."""

    name: str | None = None
    category: EventCategory | None = None
    author_id: str | None = None
    city: str | None = None
    is_featured: bool | None = None
    starts_after: datetime | None = None
    starts_before: datetime | None = None


class EventResponse(AuditResponse):
    """Event as returned by the API."""

    author_id: str | None = None
    name: str
    slug: str
    category: str
    summary: str | None = None
    description: str | None = None
    starts_at: datetime
    ends_at: datetime | None = None
    city: str | None = None
    country: str | None = None
    price: float | None = None
    is_featured: bool
