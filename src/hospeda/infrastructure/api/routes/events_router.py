"""Router for events."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from hospeda.application.services.event_service import EventService
from hospeda.domain.entities.enums import EventCategory
from hospeda.infrastructure.api.dependencies import CurrentActor, DbSession, get_event_service
from hospeda.infrastructure.api.responses import respond
from hospeda.infrastructure.api.routes.crud_router import Pagination, build_crud_router
from hospeda.infrastructure.api.schemas.event_schemas import (
    EventCreate,
    EventResponse,
    EventSearch,
    EventUpdate,
)

router = APIRouter(tags=["Events"])

EventSvc = Annotated[EventService, Depends(get_event_service)]


@router.get("/upcoming", summary="Upcoming events")
async def get_upcoming_events(
    actor: CurrentActor,
    service: EventSvc,
    session: DbSession,
    pagination: Pagination,
    days_ahead: Annotated[int, Query(ge=1, le=365)] = 30,
) -> JSONResponse:
    result = await service.get_upcoming(actor, days_ahead, pagination)
    return await respond(session, result, schema=EventResponse)


@router.get("/category/{category}", summary="Events of a category")
async def get_events_by_category(
    category: EventCategory,
    actor: CurrentActor,
    service: EventSvc,
    session: DbSession,
    pagination: Pagination,
) -> JSONResponse:
    result = await service.get_by_category(actor, category, pagination)
    return await respond(session, result, schema=EventResponse)


@router.get("/author/{author_id}", summary="Events of an author")
async def get_events_by_author(
    author_id: str,
    actor: CurrentActor,
    service: EventSvc,
    session: DbSession,
    pagination: Pagination,
) -> JSONResponse:
    result = await service.get_by_author(actor, author_id, pagination)
    return await respond(session, result, schema=EventResponse)


build_crud_router(
    service_dependency=get_event_service,
    create_schema=EventCreate,
    update_schema=EventUpdate,
    search_schema=EventSearch,
    response_schema=EventResponse,
    router=router,
)
