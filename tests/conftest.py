"""Pytest configuration for all tests."""

from collections.abc import Callable, Iterable
from typing import AsyncGenerator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hospeda.core.config import Settings
from hospeda.core.context import ServiceContext
from hospeda.core.logging import ServiceLogger
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.services.role_permissions import default_permissions_for
from hospeda.infrastructure.persistence import models  # noqa: F401
from hospeda.infrastructure.persistence.database import Base

TEST_SECRET_KEY = "test-secret-key-for-hospeda-unit-tests-0123456789"


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key=TEST_SECRET_KEY,
        log_format="console",
    )


@pytest.fixture
def mock_logger() -> MagicMock:
    """Structlog-like logger recording every call."""
    return MagicMock()


@pytest.fixture
def ctx(settings: Settings, mock_logger: MagicMock) -> ServiceContext:
    """Service context writing to the mock logger."""
    return ServiceContext(logger=ServiceLogger(mock_logger), settings=settings)


@pytest.fixture
def make_actor() -> Callable[..., Actor]:
    """Factory for actors.

    Permissions default to the seeded permissions of the role.
    """

    def _make(
        role: Role = Role.USER,
        id: str | None = "user-1",
        permissions: Iterable[Permission] | None = None,
        is_active: bool = True,
    ) -> Actor:
        perms = default_permissions_for(role) if permissions is None else permissions
        return Actor.build(id, role, perms, is_active)

    return _make


@pytest.fixture
def guest(make_actor: Callable[..., Actor]) -> Actor:
    return make_actor(Role.GUEST, id=None)


@pytest.fixture
def super_admin(make_actor: Callable[..., Actor]) -> Actor:
    return make_actor(Role.SUPER_ADMIN, id="super-admin-1")


@pytest.fixture
def admin(make_actor: Callable[..., Actor]) -> Actor:
    return make_actor(Role.ADMIN, id="admin-1")


@pytest.fixture
def editor(make_actor: Callable[..., Actor]) -> Actor:
    return make_actor(Role.EDITOR, id="editor-1")


@pytest.fixture
def host(make_actor: Callable[..., Actor]) -> Actor:
    return make_actor(Role.HOST, id="host-1")


@pytest.fixture
def user(make_actor: Callable[..., Actor]) -> Actor:
    return make_actor(Role.USER, id="user-1")


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    async_session_maker = sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()
