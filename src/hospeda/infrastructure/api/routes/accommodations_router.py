"""Router for accommodations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from hospeda.application.services.accommodation_service import AccommodationService
from hospeda.infrastructure.api.dependencies import (
    CurrentActor,
    DbSession,
    get_accommodation_service,
)
from hospeda.infrastructure.api.responses import respond
from hospeda.infrastructure.api.routes.crud_router import Pagination, build_crud_router
from hospeda.infrastructure.api.schemas.accommodation_schemas import (
    AccommodationCreate,
    AccommodationResponse,
    AccommodationSearch,
    AccommodationUpdate,
)

router = APIRouter(tags=["Accommodations"])

AccommodationSvc = Annotated[AccommodationService, Depends(get_accommodation_service)]


@router.get("/top-rated", summary="Best rated accommodations")
async def get_top_rated_accommodations(
    actor: CurrentActor,
    service: AccommodationSvc,
    session: DbSession,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> JSONResponse:
    result = await service.get_top_rated(actor, limit)
    return await respond(session, result, schema=AccommodationResponse)


@router.get("/destination/{destination_id}", summary="Accommodations of a destination")
async def get_accommodations_by_destination(
    destination_id: str,
    actor: CurrentActor,
    service: AccommodationSvc,
    session: DbSession,
    pagination: Pagination,
) -> JSONResponse:
    result = await service.get_by_destination(actor, destination_id, pagination)
    return await respond(session, result, schema=AccommodationResponse)


@router.get("/{entity_id}/summary", summary="Accommodation summary")
async def get_accommodation_summary(
    entity_id: str,
    actor: CurrentActor,
    service: AccommodationSvc,
    session: DbSession,
) -> JSONResponse:
    result = await service.get_summary(actor, entity_id)
    return await respond(session, result)


build_crud_router(
    service_dependency=get_accommodation_service,
    create_schema=AccommodationCreate,
    update_schema=AccommodationUpdate,
    search_schema=AccommodationSearch,
    response_schema=AccommodationResponse,
    router=router,
)
