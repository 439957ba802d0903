"""Pytest configuration for API integration tests."""

from collections.abc import Callable
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from hospeda.core.config import Settings
from hospeda.domain.entities.role import Role
from hospeda.infrastructure.api.app import create_app
from hospeda.infrastructure.auth.jwt_service import JWTService
from hospeda.infrastructure.persistence.database import DatabaseManager, init_database


@pytest_asyncio.fixture
async def app(settings: Settings, engine: AsyncEngine) -> FastAPI:
    """Application bound to the in-memory test database.

    The lifespan does not run under ``ASGITransport``, so the database is
    initialized here.
    """
    db = DatabaseManager(settings, engine=engine)
    await init_database(db)
    return create_app(settings, db=db)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the application in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[..., dict[str, str]]:
    """Factory for Authorization headers carrying a signed access token."""
    jwt_service = JWTService(settings.secret_key)

    def _headers(role: Role = Role.USER, user_id: str = "user-1") -> dict[str, str]:
        token = jwt_service.create_access_token(user_id, role.value)
        return {"Authorization": f"Bearer {token}"}

    return _headers
