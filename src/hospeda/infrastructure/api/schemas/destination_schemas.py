"""Pydantic schemas for destination endpoints."""

from typing import Any

from pydantic import Field

from hospeda.domain.entities.visibility import LifecycleState, Visibility
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class DestinationCreate(InputSchema):
    """Request body for creating a destination."""

    name: str = Field(..., min_length=2, max_length=150)
    summary: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    country: str | None = Field(default=None, min_length=2, max_length=2, description="ISO 3166-1 alpha-2")
    state: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    is_featured: bool = False
    visibility: Visibility | None = None
    lifecycle_state: LifecycleState | None = None


class DestinationUpdate(InputSchema):
    """Request body for updating a destination. All fields are optional."""

    name: str | None = Field(default=None, min_length=2, max_length=150)
    summary: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    country: str | None = Field(default=None, min_length=2, max_length=2)
    state: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    is_featured: bool | None = None
    lifecycle_state: LifecycleState | None = None


class DestinationSearch(SearchSchema):
    """Search params for destinations."""

    name: str | None = None
    country: str | None = None
    city: str | None = None
    is_featured: bool | None = None
    min_rating: float | None = Field(default=None, ge=0, le=5)
    max_rating: float | None = Field(default=None, ge=0, le=5)


class DestinationResponse(AuditResponse):
    """Destination as returned by the API."""

    name: str
    slug: str
    summary: str | None = None
    description: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    is_featured: bool
    accommodations_count: int
    reviews_count: int
    rating: dict[str, Any] = Field(default_factory=dict)
    average_rating: float
