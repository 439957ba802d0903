"""Router for destinations."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hospeda.application.services.destination_service import DestinationService
from hospeda.infrastructure.api.dependencies import (
    CurrentActor,
    DbSession,
    get_destination_service,
)
from hospeda.infrastructure.api.responses import respond
from hospeda.infrastructure.api.routes.crud_router import build_crud_router
from hospeda.infrastructure.api.schemas.accommodation_schemas import AccommodationResponse
from hospeda.infrastructure.api.schemas.destination_schemas import (
    DestinationCreate,
    DestinationResponse,
    DestinationSearch,
    DestinationUpdate,
)

router = APIRouter(tags=["Destinations"])


@router.get("/{entity_id}/accommodations", summary="Accommodations of a destination")
async def get_destination_accommodations(
    entity_id: str,
    actor: CurrentActor,
    service: Annotated[DestinationService, Depends(get_destination_service)],
    session: DbSession,
) -> JSONResponse:
    result = await service.get_accommodations(actor, entity_id)
    return await respond(session, result, schema=AccommodationResponse)


build_crud_router(
    service_dependency=get_destination_service,
    create_schema=DestinationCreate,
    update_schema=DestinationUpdate,
    search_schema=DestinationSearch,
    response_schema=DestinationResponse,
    router=router,
)
