"""Pydantic schemas for payment endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from hospeda.domain.entities.enums import PaymentStatus, PaymentType
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class PaymentCreate(InputSchema):
    """Request body for registering a payment."""

    user_id: str
    amount: float = Field(..., gt=0)
    currency: str = Field(default="ARS", min_length=3, max_length=3)
    type: PaymentType = PaymentType.ONE_TIME
    status: PaymentStatus = PaymentStatus.PENDING
    provider: str = Field(default="mercado_pago", max_length=30)
    provider_payment_id: str | None = Field(default=None, max_length=64)
    plan_id: str | None = None
    description: str | None = Field(default=None, max_length=300)


class PaymentUpdate(InputSchema):
    """Request body for updating a payment."""

    status: PaymentStatus | None = None
    description: str | None = Field(default=None, max_length=300)
    provider_payment_id: str | None = Field(default=None, max_length=64)


class PaymentSearch(SearchSchema):
    """Search params for payments."""

    user_id: str | None = None
    status: PaymentStatus | None = None
    type: PaymentType | None = None
    provider: str | None = None
    min_amount: float | None = Field(default=None, ge=0)
    max_amount: float | None = Field(default=None, ge=0)


class PaymentResponse(AuditResponse):
    """Payment as returned by the API."""

    user_id: str
    plan_id: str | None = None
    amount: float
    currency: str
    status: str
    type: str
    provider: str
    provider_payment_id: str | None = None
    description: str | None = None
    provider_data: dict[str, Any] | None = None


class WebhookPayload(BaseModel):
    """Notification body sent by the payment provider."""

    type: str = Field(..., description="payment, subscription, preapproval or plan")
    action: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class WebhookResponse(BaseModel):
    """Normalized outcome of processing a webhook."""

    success: bool
    payment_id: str | None = None
    subscription_id: str | None = None
    actions: list[str] = Field(default_factory=list)
    error_message: str | None = None
