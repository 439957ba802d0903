"""Pytest configuration for unit tests."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

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


@pytest.fixture
def accommodation_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, AccommodationModel)


@pytest.fixture
def destination_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, DestinationModel)


@pytest.fixture
def accommodation_review_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, AccommodationReviewModel)


@pytest.fixture
def destination_review_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, DestinationReviewModel)


@pytest.fixture
def event_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, EventModel)


@pytest.fixture
def post_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, PostModel)


@pytest.fixture
def tag_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, TagModel)


@pytest.fixture
def promotion_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, PromotionModel)


@pytest.fixture
def user_repository(db_session: AsyncSession) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db_session, UserModel)


@pytest.fixture
def payment_repository(db_session: AsyncSession) -> PaymentRepository:
    return PaymentRepository(db_session)
