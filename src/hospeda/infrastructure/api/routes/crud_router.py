"""Route factory binding HTTP verbs to a CRUD service.

``build_crud_router`` registers the standard endpoints of one entity on a
router. Entity modules register their own endpoints first and then call the
factory, so fixed paths such as ``/featured`` win over ``/{entity_id}``.
"""

from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hospeda.application.services.crud_service import CrudService
from hospeda.domain.entities.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationParams
from hospeda.infrastructure.api.dependencies import CurrentActor, DbSession
from hospeda.infrastructure.api.responses import respond
from hospeda.infrastructure.api.schemas.common_schemas import VisibilityUpdateRequest


def pagination_params(
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> PaginationParams:
    """Read ``page``/``page_size`` query params."""
    return PaginationParams(page=page, page_size=page_size)


Pagination = Annotated[PaginationParams, Depends(pagination_params)]


def build_crud_router(
    *,
    service_dependency: Callable[..., CrudService[Any]],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    search_schema: type[BaseModel],
    response_schema: type[BaseModel],
    router: APIRouter | None = None,
    slug_lookup: bool = True,
) -> APIRouter:
    """Register list, search, count, get, create, update, visibility, delete and restore routes.

    Args:
        service_dependency: FastAPI dependency returning the entity service.
        create_schema: Request body of ``POST /``.
        update_schema: Request body of ``PATCH /{entity_id}``.
        search_schema: Request body of ``POST /search``.
        response_schema: Schema records are rendered with.
        router: Router to extend. A new one is created when omitted.
        slug_lookup: Register ``GET /slug/{slug}``.

    Returns:
        The router.
    """
    router = router or APIRouter()
    Service = Annotated[CrudService[Any], Depends(service_dependency)]

    @router.get("", summary="List records")
    async def list_records(
        actor: CurrentActor,
        service: Service,
        session: DbSession,
        pagination: Pagination,
    ) -> JSONResponse:
        result = await service.list(actor, pagination)
        return await respond(session, result, schema=response_schema)

    @router.post("/search", summary="Search records")
    async def search_records(
        actor: CurrentActor,
        service: Service,
        session: DbSession,
        params: search_schema | None = None,
    ) -> JSONResponse:
        result = await service.search(actor, params)
        return await respond(session, result, schema=response_schema)

    @router.get("/count", summary="Count records")
    async def count_records(
        request: Request,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
    ) -> JSONResponse:
        result = await service.count(actor, dict(request.query_params))
        return await respond(session, result)

    if slug_lookup:

        @router.get("/slug/{slug}", summary="Get a record by slug")
        async def get_record_by_slug(
            slug: str,
            actor: CurrentActor,
            service: Service,
            session: DbSession,
        ) -> JSONResponse:
            result = await service.get_by_slug(actor, slug)
            return await respond(session, result, schema=response_schema)

    @router.get("/{entity_id}", summary="Get a record")
    async def get_record(
        entity_id: str,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
    ) -> JSONResponse:
        result = await service.get_by_id(actor, entity_id)
        return await respond(session, result, schema=response_schema)

    @router.post("", summary="Create a record")
    async def create_record(
        data: create_schema,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
    ) -> JSONResponse:
        result = await service.create(actor, data)
        return await respond(session, result, status.HTTP_201_CREATED, response_schema)

    @router.patch("/{entity_id}", summary="Update a record")
    async def update_record(
        entity_id: str,
        data: update_schema,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
    ) -> JSONResponse:
        result = await service.update(actor, entity_id, data)
        return await respond(session, result, schema=response_schema)

    @router.patch("/{entity_id}/visibility", summary="Change the visibility of a record")
    async def update_record_visibility(
        entity_id: str,
        body: VisibilityUpdateRequest,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
    ) -> JSONResponse:
        result = await service.update_visibility(actor, entity_id, body.visibility)
        return await respond(session, result, schema=response_schema)

    @router.delete("/{entity_id}", summary="Delete a record")
    async def delete_record(
        entity_id: str,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
        force: Annotated[bool, Query(description="Delete permanently")] = False,
    ) -> JSONResponse:
        if force:
            result = await service.hard_delete(actor, entity_id)
        else:
            result = await service.soft_delete(actor, entity_id)
        return await respond(session, result)

    @router.post("/{entity_id}/restore", summary="Restore a deleted record")
    async def restore_record(
        entity_id: str,
        actor: CurrentActor,
        service: Service,
        session: DbSession,
    ) -> JSONResponse:
        result = await service.restore(actor, entity_id)
        return await respond(session, result)

    return router
