"""Tests for resolving the request actor from an Authorization header."""

from datetime import timedelta

import pytest

from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.services.role_permissions import DEFAULT_ROLE_PERMISSIONS
from hospeda.infrastructure.auth.actor_resolver import ActorResolver, extract_bearer_token
from hospeda.infrastructure.auth.jwt_service import JWTService
from hospeda.infrastructure.persistence.repositories import RolePermissionRepository

SECRET_KEY = "actor-resolver-test-secret-key-0123456789"


@pytest.fixture
def jwt_service():
    return JWTService(SECRET_KEY)


@pytest.fixture
def resolver(db_session, jwt_service):
    return ActorResolver(db_session, jwt_service)


def bearer(jwt_service, user_id="user-1", role="USER", **kwargs):
    return f"Bearer {jwt_service.create_access_token(user_id, role, **kwargs)}"


@pytest.mark.parametrize(
    "header,expected",
    [
        (None, None),
        ("", None),
        ("Basic abc", None),
        ("Bearer ", None),
        ("Bearer abc.def", "abc.def"),
        ("bearer  abc ", "abc"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


@pytest.mark.asyncio
async def test_missing_header_is_guest(resolver):
    actor = await resolver.resolve(None)

    assert actor.is_guest
    assert actor.id is None


@pytest.mark.asyncio
async def test_bad_or_expired_token_is_guest(resolver, jwt_service):
    assert (await resolver.resolve("Bearer garbage")).is_guest
    expired = bearer(jwt_service, expires_delta=timedelta(seconds=-5))
    assert (await resolver.resolve(expired)).is_guest


@pytest.mark.asyncio
async def test_unknown_role_in_token_is_guest(resolver, jwt_service):
    assert (await resolver.resolve(bearer(jwt_service, role="EMPEROR"))).is_guest


@pytest.mark.asyncio
async def test_unknown_user_keeps_token_role_with_default_permissions(resolver, jwt_service):
    actor = await resolver.resolve(bearer(jwt_service, user_id="ghost", role="HOST"))

    assert actor.id == "ghost"
    assert actor.role is Role.HOST
    assert actor.is_active is True
    assert actor.permissions == DEFAULT_ROLE_PERMISSIONS[Role.HOST]


@pytest.mark.asyncio
async def test_stored_role_wins_over_token(resolver, jwt_service, user_repository):
    await user_repository.create(
        {"id": "user-1", "email": "ana@example.com", "display_name": "Ana", "role": "EDITOR"}
    )

    actor = await resolver.resolve(bearer(jwt_service, role="ADMIN"))

    assert actor.role is Role.EDITOR


@pytest.mark.asyncio
async def test_disabled_user_is_inactive(resolver, jwt_service, user_repository):
    await user_repository.create(
        {"id": "user-1", "email": "ana@example.com", "display_name": "Ana", "is_active": False}
    )

    actor = await resolver.resolve(bearer(jwt_service))

    assert actor.is_active is False


@pytest.mark.asyncio
async def test_stored_permissions_replace_defaults(resolver, jwt_service, db_session):
    await RolePermissionRepository(db_session).assign(Role.USER, Permission.ACCESS_API_PUBLIC)

    actor = await resolver.resolve(bearer(jwt_service))

    assert actor.permissions == frozenset({Permission.ACCESS_API_PUBLIC})
