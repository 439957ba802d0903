"""Routers for accommodation and destination reviews."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hospeda.application.services.review_service import ReviewService
from hospeda.infrastructure.api.dependencies import (
    CurrentActor,
    DbSession,
    get_accommodation_review_service,
    get_destination_review_service,
)
from hospeda.infrastructure.api.responses import respond
from hospeda.infrastructure.api.routes.crud_router import Pagination, build_crud_router
from hospeda.infrastructure.api.schemas.review_schemas import (
    AccommodationReviewCreate,
    AccommodationReviewResponse,
    AccommodationReviewSearch,
    AccommodationReviewUpdate,
    DestinationReviewCreate,
    DestinationReviewResponse,
    DestinationReviewSearch,
    DestinationReviewUpdate,
)


def build_review_router(
    *,
    tag: str,
    service_dependency: Callable[..., ReviewService],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    search_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> APIRouter:
    """Build the router of one review kind: parent and author listings plus CRUD."""
    router = APIRouter(tags=[tag])
    Service = Annotated[ReviewService, Depends(service_dependency)]

    @router.get("/parent/{parent_id}", summary="Reviews of a record")
    async def list_reviews_by_parent(
        parent_id: str,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
        pagination: Pagination,
    ) -> JSONResponse:
        result = await service.list_by_parent(actor, parent_id, pagination)
        return await respond(session, result, schema=response_schema)

    @router.get("/user/{user_id}", summary="Reviews written by a user")
    async def list_reviews_by_user(
        user_id: str,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
        pagination: Pagination,
    ) -> JSONResponse:
        result = await service.list_by_user(actor, user_id, pagination)
        return await respond(session, result, schema=response_schema)

    @router.post("/parent/{parent_id}/recalculate", summary="Recompute review stats")
    async def recalculate_review_stats(
        parent_id: str,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
    ) -> JSONResponse:
        result = await service.recalculate_stats(actor, parent_id)
        return await respond(session, result)

    return build_crud_router(
        service_dependency=service_dependency,
        create_schema=create_schema,
        update_schema=update_schema,
        search_schema=search_schema,
        response_schema=response_schema,
        router=router,
        slug_lookup=False,
    )


accommodation_reviews_router = build_review_router(
    tag="Accommodation reviews",
    service_dependency=get_accommodation_review_service,
    create_schema=AccommodationReviewCreate,
    update_schema=AccommodationReviewUpdate,
    search_schema=AccommodationReviewSearch,
    response_schema=AccommodationReviewResponse,
)

destination_reviews_router = build_review_router(
    tag="Destination reviews",
    service_dependency=get_destination_review_service,
    create_schema=DestinationReviewCreate,
    update_schema=DestinationReviewUpdate,
    search_schema=DestinationReviewSearch,
    response_schema=DestinationReviewResponse,
)
