"""Router for posts."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hospeda.application.services.post_service import PostService
from hospeda.domain.entities.enums import PostCategory
from hospeda.infrastructure.api.dependencies import CurrentActor, DbSession, get_post_service
from hospeda.infrastructure.api.responses import respond
from hospeda.infrastructure.api.routes.crud_router import Pagination, build_crud_router
from hospeda.infrastructure.api.schemas.post_schemas import (
    PostCreate,
    PostResponse,
    PostSearch,
    PostUpdate,
)

router = APIRouter(tags=["Posts"])

PostSvc = Annotated[PostService, Depends(get_post_service)]


@router.get("/featured", summary="Featured posts")
async def get_featured_posts(
    actor: CurrentActor,
    service: PostSvc,
    session: DbSession,
    pagination: Pagination,
) -> JSONResponse:
    result = await service.get_featured(actor, pagination)
    return await respond(session, result, schema=PostResponse)


@router.get("/category/{category}", summary="Posts of a category")
async def get_posts_by_category(
    category: PostCategory,
    actor: CurrentActor,
    service: PostSvc,
    session: DbSession,
    pagination: Pagination,
) -> JSONResponse:
    result = await service.get_by_category(actor, category, pagination)
    return await respond(session, result, schema=PostResponse)


build_crud_router(
    service_dependency=get_post_service,
    create_schema=PostCreate,
    update_schema=PostUpdate,
    search_schema=PostSearch,
    response_schema=PostResponse,
    router=router,
)
