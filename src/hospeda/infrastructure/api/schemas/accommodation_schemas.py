"""Pydantic schemas for accommodation endpoints."""

from typing import Any

from pydantic import Field

from hospeda.domain.entities.enums import AccommodationType
from hospeda.domain.entities.visibility import LifecycleState, Visibility
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class AccommodationCreate(InputSchema):
    """Request body for creating an accommodation."""

    name: str = Field(..., min_length=3, max_length=150, description="Display name")
    type: AccommodationType = Field(..., description="Accommodation type")
    summary: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    destination_id: str | None = Field(default=None, description="Destination ID")
    owner_id: str | None = Field(
        default=None,
        description="Owning host. Defaults to the creating actor.",
    )
    price: float | None = Field(default=None, ge=0, description="Base nightly price")
    currency: str = Field(default="ARS", min_length=3, max_length=3)
    is_featured: bool = False
    visibility: Visibility | None = Field(
        default=None,
        description="Defaults to PRIVATE until published",
    )
    lifecycle_state: LifecycleState | None = None


class AccommodationUpdate(InputSchema):
    """Request body for updating an accommodation. All fields are optional."""

    name: str | None = Field(default=None, min_length=3, max_length=150)
    type: AccommodationType | None = None
    summary: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    destination_id: str | None = None
    price: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    is_featured: bool | None = None
    lifecycle_state: LifecycleState | None = None


class AccommodationSearch(SearchSchema):
    """Search params for accommodations."""

    name: str | None = Field(default=None, description="Substring of the name")
    slug: str | None = None
    type: AccommodationType | None = None
    destination_id: str | None = None
    owner_id: str | None = None
    is_featured: bool | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    min_rating: float | None = Field(default=None, ge=0, le=5)


class AccommodationResponse(AuditResponse):
    """Accommodation as returned by the API."""

    owner_id: str | None = None
    destination_id: str | None = None
    name: str
    slug: str
    type: str
    summary: str | None = None
    description: str | None = None
    price: float | None = None
    currency: str
    is_featured: bool
    reviews_count: int
    rating: dict[str, Any] = Field(default_factory=dict)
    average_rating: float
