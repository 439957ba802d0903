"""FastAPI dependencies.

Provides the request-scoped database session, the calling actor and the
per-entity services. Services are built per request around the request's
session, so every service call of one request shares one transaction.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hospeda.application.services.accommodation_service import AccommodationService
from hospeda.application.services.destination_service import DestinationService
from hospeda.application.services.event_service import EventService
from hospeda.application.services.payment_service import PaymentService
from hospeda.application.services.post_service import PostService
from hospeda.application.services.promotion_service import PromotionService
from hospeda.application.services.review_service import (
    AccommodationReviewService,
    DestinationReviewService,
)
from hospeda.application.services.tag_service import TagService
from hospeda.application.services.user_service import UserService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.infrastructure.auth import ActorResolver, JWTService
from hospeda.infrastructure.payments import WebhookHandler, webhook_actor
from hospeda.infrastructure.persistence.models import (
    AccommodationModel,
    AccommodationReviewModel,
    DestinationModel,
    DestinationReviewModel,
    EventModel,
    PostModel,
    PromotionModel,
    TagModel,
    UserModel,
)
from hospeda.infrastructure.persistence.repositories import (
    PaymentRepository,
    SqlAlchemyRepository,
)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    The session commits when the request completes and rolls back if it
    raises.

    Yields:
        AsyncSession: Database session.
    """
    async with request.app.state.db.session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_service_context(request: Request) -> ServiceContext:
    """Get the service context built at application startup."""
    return request.app.state.service_context


def get_jwt_service(request: Request) -> JWTService:
    """Get the JWT service built at application startup."""
    return request.app.state.jwt_service


ServiceCtx = Annotated[ServiceContext, Depends(get_service_context)]


async def get_actor(
    session: DbSession,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> Actor:
    """Resolve the calling actor from the Authorization header.

    Requests without valid credentials are served as the guest actor; the
    services decide what a guest may do.
    """
    return await ActorResolver(session, jwt_service).resolve(authorization)


CurrentActor = Annotated[Actor, Depends(get_actor)]


def get_accommodation_service(session: DbSession, ctx: ServiceCtx) -> AccommodationService:
    return AccommodationService(
        ctx,
        SqlAlchemyRepository(session, AccommodationModel),
        destination_repository=SqlAlchemyRepository(session, DestinationModel),
    )


def get_destination_service(session: DbSession, ctx: ServiceCtx) -> DestinationService:
    return DestinationService(
        ctx,
        SqlAlchemyRepository(session, DestinationModel),
        accommodation_repository=SqlAlchemyRepository(session, AccommodationModel),
    )


def get_event_service(session: DbSession, ctx: ServiceCtx) -> EventService:
    return EventService(ctx, SqlAlchemyRepository(session, EventModel))


def get_post_service(session: DbSession, ctx: ServiceCtx) -> PostService:
    return PostService(ctx, SqlAlchemyRepository(session, PostModel))


def get_tag_service(session: DbSession, ctx: ServiceCtx) -> TagService:
    return TagService(ctx, SqlAlchemyRepository(session, TagModel))


def get_accommodation_review_service(
    session: DbSession,
    ctx: ServiceCtx,
) -> AccommodationReviewService:
    return AccommodationReviewService(
        ctx,
        SqlAlchemyRepository(session, AccommodationReviewModel),
        SqlAlchemyRepository(session, AccommodationModel),
    )


def get_destination_review_service(
    session: DbSession,
    ctx: ServiceCtx,
) -> DestinationReviewService:
    return DestinationReviewService(
        ctx,
        SqlAlchemyRepository(session, DestinationReviewModel),
        SqlAlchemyRepository(session, DestinationModel),
    )


def get_promotion_service(session: DbSession, ctx: ServiceCtx) -> PromotionService:
    return PromotionService(ctx, SqlAlchemyRepository(session, PromotionModel))


def get_payment_service(session: DbSession, ctx: ServiceCtx) -> PaymentService:
    return PaymentService(ctx, PaymentRepository(session))


def get_user_service(session: DbSession, ctx: ServiceCtx) -> UserService:
    return UserService(ctx, SqlAlchemyRepository(session, UserModel))


def get_webhook_handler(
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
    ctx: ServiceCtx,
) -> WebhookHandler:
    """Build the webhook handler; status changes are attributed to the webhook actor."""
    return WebhookHandler(
        payment_service,
        webhook_actor(),
        secret=ctx.settings.webhook_secret,
    )


PaymentWebhookHandler = Annotated[WebhookHandler, Depends(get_webhook_handler)]
