"""Pydantic schemas for user endpoints."""

from pydantic import Field, field_validator

from hospeda.domain.entities.role import Role
from hospeda.domain.entities.visibility import LifecycleState, Visibility
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class UserCreate(InputSchema):
    """Request body for creating a user."""

    email: str = Field(..., min_length=3, max_length=255)
    display_name: str = Field(..., min_length=1, max_length=100)
    role: Role = Role.USER
    is_active: bool = True
    visibility: Visibility | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a basic ``local@domain`` shape and lowercase the address."""
        v = v.strip().lower()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("Invalid email address")
        return v


class UserUpdate(InputSchema):
    """Request body for updating a user."""

    display_name: str | None = Field(default=None, min_length=1, max_length=100)
    role: Role | None = None
    is_active: bool | None = None
    lifecycle_state: LifecycleState | None = None


class UserSearch(SearchSchema):
    """Search params for users."""

    email: str | None = None
    display_name: str | None = None
    role: Role | None = None
    is_active: bool | None = None


class UserResponse(AuditResponse):
    """User as returned by the API."""

    email: str
    display_name: str
    role: str
    is_active: bool
