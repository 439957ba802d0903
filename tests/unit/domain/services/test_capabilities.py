"""Unit tests for capability helpers."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.services.capabilities import (
    has_all_permissions,
    has_any_permission,
    has_permission,
    is_deleted,
    is_owner,
)


@pytest.fixture
def host_actor():
    return Actor.build(
        "host-1",
        Role.HOST,
        [Permission.ACCOMMODATION_UPDATE_OWN, Permission.ACCOMMODATION_CREATE],
    )


def test_has_permission(host_actor):
    assert has_permission(host_actor, Permission.ACCOMMODATION_CREATE)
    assert not has_permission(host_actor, Permission.ACCOMMODATION_UPDATE_ANY)


def test_has_any_and_all(host_actor):
    assert has_any_permission(
        host_actor, Permission.ACCOMMODATION_UPDATE_ANY, Permission.ACCOMMODATION_UPDATE_OWN
    )
    assert not has_any_permission(host_actor, Permission.TAG_CREATE, Permission.TAG_DELETE)
    assert has_all_permissions(
        host_actor, Permission.ACCOMMODATION_CREATE, Permission.ACCOMMODATION_UPDATE_OWN
    )
    assert not has_all_permissions(
        host_actor, Permission.ACCOMMODATION_CREATE, Permission.TAG_CREATE
    )


def test_is_owner(host_actor):
    assert is_owner(host_actor, SimpleNamespace(owner_id="host-1"))
    assert not is_owner(host_actor, SimpleNamespace(owner_id="host-2"))


def test_entity_without_owner_is_owned_by_nobody(host_actor):
    assert not is_owner(host_actor, SimpleNamespace(owner_id=None))
    assert not is_owner(host_actor, SimpleNamespace())


def test_guest_owns_nothing():
    guest = Actor(id=None, role=Role.GUEST)

    assert not is_owner(guest, SimpleNamespace(owner_id=None))


def test_is_deleted():
    assert is_deleted(SimpleNamespace(deleted_at=datetime.now(timezone.utc)))
    assert not is_deleted(SimpleNamespace(deleted_at=None))
    assert not is_deleted(SimpleNamespace())
