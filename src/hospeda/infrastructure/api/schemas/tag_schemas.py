"""Pydantic schemas for tag endpoints."""

from pydantic import Field

from hospeda.domain.entities.visibility import LifecycleState, Visibility
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class TagCreate(InputSchema):
    """Request body for creating a tag."""

    name: str = Field(..., min_length=2, max_length=60)
    color: str | None = Field(default=None, max_length=20)
    notes: str | None = Field(default=None, max_length=300)
    visibility: Visibility | None = None
    lifecycle_state: LifecycleState | None = None


class TagUpdate(InputSchema):
    """Request body for updating a tag."""

    name: str | None = Field(default=None, min_length=2, max_length=60)
    color: str | None = Field(default=None, max_length=20)
    notes: str | None = Field(default=None, max_length=300)
    lifecycle_state: LifecycleState | None = None


class TagSearch(SearchSchema):
    """Search params for tags."""

    name: str | None = None
    color: str | None = None


class TagResponse(AuditResponse):
    """Tag as returned by the API."""

    name: str
    slug: str
    color: str | None = None
    notes: str | None = None
