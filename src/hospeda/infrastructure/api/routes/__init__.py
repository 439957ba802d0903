"""API Routes for Hospeda."""

from hospeda.infrastructure.api.routes.accommodations_router import (
    router as accommodations_router,
)
from hospeda.infrastructure.api.routes.crud_router import build_crud_router
from hospeda.infrastructure.api.routes.destinations_router import router as destinations_router
from hospeda.infrastructure.api.routes.events_router import router as events_router
from hospeda.infrastructure.api.routes.payments_router import router as payments_router
from hospeda.infrastructure.api.routes.payments_router import webhooks_router
from hospeda.infrastructure.api.routes.posts_router import router as posts_router
from hospeda.infrastructure.api.routes.promotions_router import router as promotions_router
from hospeda.infrastructure.api.routes.reviews_router import (
    accommodation_reviews_router,
    destination_reviews_router,
)
from hospeda.infrastructure.api.routes.tags_router import router as tags_router
from hospeda.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "accommodation_reviews_router",
    "accommodations_router",
    "build_crud_router",
    "destination_reviews_router",
    "destinations_router",
    "events_router",
    "payments_router",
    "posts_router",
    "promotions_router",
    "tags_router",
    "users_router",
    "webhooks_router",
]
