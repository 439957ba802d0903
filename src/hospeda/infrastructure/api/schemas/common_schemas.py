"""Pydantic schemas shared by every entity endpoint."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hospeda.domain.entities.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from hospeda.domain.entities.visibility import LifecycleState, Visibility


class InputSchema(BaseModel):
    """Base for create/update bodies: unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_default=True)


class SearchSchema(BaseModel):
    """Base for search params: pagination plus entity-specific filters."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Items per page",
    )


class VisibilityUpdateRequest(BaseModel):
    """Request body for changing a record's visibility."""

    visibility: Visibility


class AuditResponse(BaseModel):
    """Fields common to every managed record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    created_by_id: str | None = None
    updated_by_id: str | None = None
    deleted_by_id: str | None = None
    lifecycle_state: LifecycleState | str
    visibility: Visibility | str
