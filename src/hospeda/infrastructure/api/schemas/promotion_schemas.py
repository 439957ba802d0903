"""Pydantic schemas for promotion endpoints."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class PromotionCreate(InputSchema):
    """Request body for creating a promotion.

    ``rules`` may be a JSON object or free text.
    """

    name: str = Field(..., min_length=3, max_length=150)
    description: str | None = Field(default=None, max_length=500)
    rules: str | None = None
    starts_at: datetime
    ends_at: datetime
    is_active: bool = True

    @field_validator("rules", mode="before")
    @classmethod
    def rules_to_text(cls, v: Any) -> Any:
        """Store JSON rules as text."""
        if isinstance(v, dict):
            return json.dumps(v)
        return v


class PromotionUpdate(InputSchema):
    """Request body for updating a promotion."""

    name: str | None = Field(default=None, min_length=3, max_length=150)
    description: str | None = Field(default=None, max_length=500)
    rules: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    is_active: bool | None = None

    @field_validator("rules", mode="before")
    @classmethod
    def rules_to_text(cls, v: Any) -> Any:
        """Store JSON rules as text."""
        if isinstance(v, dict):
            return json.dumps(v)
        return v


class PromotionSearch(SearchSchema):
    """Search params for promotions."""

    name: str | None = None
    is_active: bool | None = None


class PromotionResponse(AuditResponse):
    """Promotion as returned by the API."""

    name: str
    description: str | None = None
    rules: str | None = None
    starts_at: datetime
    ends_at: datetime
    is_active: bool


class PurchaseRequest(BaseModel):
    """Purchase a promotion is applied to."""

    client_id: str
    amount: float = Field(..., ge=0)
    currency: str = Field(default="ARS", min_length=3, max_length=3)
    items: list[dict[str, Any]] = Field(default_factory=list)


class PromotionApplicationResponse(BaseModel):
    """Outcome of applying a promotion."""

    applied: bool
    discount_amount: float
    final_amount: float
    reason: str | None = None
    applied_rules: list[str] = Field(default_factory=list)


class PromotionActiveResponse(BaseModel):
    promotion_id: str
    is_active: bool
