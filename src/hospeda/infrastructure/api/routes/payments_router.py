"""Routers for payments and payment provider webhooks."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Header, Request, status
from fastapi.responses import JSONResponse

from hospeda.core.logging import get_logger
from hospeda.infrastructure.api.dependencies import (
    DbSession,
    PaymentWebhookHandler,
    get_payment_service,
)
from hospeda.infrastructure.api.routes.crud_router import build_crud_router
from hospeda.infrastructure.api.schemas.payment_schemas import (
    PaymentCreate,
    PaymentResponse,
    PaymentSearch,
    PaymentUpdate,
    WebhookResponse,
)

logger = get_logger(__name__)

router = build_crud_router(
    service_dependency=get_payment_service,
    create_schema=PaymentCreate,
    update_schema=PaymentUpdate,
    search_schema=PaymentSearch,
    response_schema=PaymentResponse,
    router=APIRouter(tags=["Payments"]),
    slug_lookup=False,
)

webhooks_router = APIRouter(tags=["Webhooks"])


@webhooks_router.post(
    "/payments",
    response_model=WebhookResponse,
    summary="Receive a payment provider notification",
)
async def receive_payment_webhook(
    request: Request,
    payload: Annotated[dict[str, Any], Body()],
    handler: PaymentWebhookHandler,
    session: DbSession,
    x_signature: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    """Process a provider notification.

    The provider retries on non-2xx responses, so only malformed or
    unauthenticated notifications are rejected; notifications that fail
    for other reasons are acknowledged with ``success=false``.
    """
    raw_body = await request.body()
    result = await handler.process(payload, signature=x_signature, raw_body=raw_body)
    if not result.success:
        await session.rollback()
        logger.warning("Payment webhook not applied", error=result.error_message)
    status_code = (
        status.HTTP_400_BAD_REQUEST
        if result.error_message in ("Invalid webhook signature", "Invalid webhook payload")
        else status.HTTP_200_OK
    )
    return JSONResponse(
        status_code=status_code,
        content=WebhookResponse.model_validate(result, from_attributes=True).model_dump(),
    )
