"""Router for promotions."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hospeda.application.services.promotion_service import PromotionService
from hospeda.domain.entities.service_result import ServiceResult
from hospeda.domain.services.promotion_rules import Purchase
from hospeda.infrastructure.api.dependencies import (
    CurrentActor,
    DbSession,
    get_promotion_service,
)
from hospeda.infrastructure.api.responses import respond
from hospeda.infrastructure.api.routes.crud_router import build_crud_router
from hospeda.infrastructure.api.schemas.promotion_schemas import (
    PromotionActiveResponse,
    PromotionApplicationResponse,
    PromotionCreate,
    PromotionResponse,
    PromotionSearch,
    PromotionUpdate,
    PurchaseRequest,
)

router = APIRouter(tags=["Promotions"])

PromotionSvc = Annotated[PromotionService, Depends(get_promotion_service)]


@router.get("/{entity_id}/is-active", summary="Check whether a promotion is active")
async def check_promotion_active(
    entity_id: str,
    actor: CurrentActor,
    service: PromotionSvc,
    session: DbSession,
) -> JSONResponse:
    result = await service.is_active(actor, entity_id)
    if result.is_ok:
        result = ServiceResult.ok(
            PromotionActiveResponse(promotion_id=entity_id, is_active=result.data)
        )
    return await respond(session, result)


@router.post("/{entity_id}/apply", summary="Apply a promotion to a purchase")
async def apply_promotion(
    entity_id: str,
    purchase: PurchaseRequest,
    actor: CurrentActor,
    service: PromotionSvc,
    session: DbSession,
) -> JSONResponse:
    result = await service.apply_promotion(
        actor,
        entity_id,
        purchase.client_id,
        Purchase(amount=purchase.amount, currency=purchase.currency, items=purchase.items),
    )
    if result.is_ok:
        application = PromotionApplicationResponse.model_validate(result.data, from_attributes=True)
        result = ServiceResult.ok(application)
    return await respond(session, result)


build_crud_router(
    service_dependency=get_promotion_service,
    create_schema=PromotionCreate,
    update_schema=PromotionUpdate,
    search_schema=PromotionSearch,
    response_schema=PromotionResponse,
    router=router,
    slug_lookup=False,
)
