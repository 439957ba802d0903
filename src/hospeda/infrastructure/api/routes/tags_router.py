"""Router for tags."""

from fastapi import APIRouter

from hospeda.infrastructure.api.dependencies import get_tag_service
from hospeda.infrastructure.api.routes.crud_router import build_crud_router
from hospeda.infrastructure.api.schemas.tag_schemas import (
    TagCreate,
    TagResponse,
    TagSearch,
    TagUpdate,
)

router = build_crud_router(
    service_dependency=get_tag_service,
    create_schema=TagCreate,
    update_schema=TagUpdate,
    search_schema=TagSearch,
    response_schema=TagResponse,
    router=APIRouter(tags=["Tags"]),
)
