"""Router for users."""

from fastapi import APIRouter

from hospeda.infrastructure.api.dependencies import get_user_service
from hospeda.infrastructure.api.routes.crud_router import build_crud_router
from hospeda.infrastructure.api.schemas.user_schemas import (
    UserCreate,
    UserResponse,
    UserSearch,
    UserUpdate,
)

router = build_crud_router(
    service_dependency=get_user_service,
    create_schema=UserCreate,
    update_schema=UserUpdate,
    search_schema=UserSearch,
    response_schema=UserResponse,
    router=APIRouter(tags=["Users"]),
    slug_lookup=False,
)
