"""Unit tests for the standard ownership policy."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from hospeda.domain.entities.actor import Actor, guest_actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.entity_policy import (
    CrudHooks,
    EntityPermissions,
    ownership_policy,
    require_authenticated,
)

PERMS = EntityPermissions.unscoped(
    "event",
    create=Permission.EVENT_CREATE,
    update=Permission.EVENT_UPDATE,
    delete=Permission.EVENT_DELETE,
    restore=Permission.EVENT_RESTORE,
    hard_delete=Permission.EVENT_HARD_DELETE,
    view_all=Permission.EVENT_VIEW_ALL,
)


def record(visibility="PUBLIC", deleted=False):
    return SimpleNamespace(
        id="ev1",
        visibility=visibility,
        owner_id="author-1",
        deleted_at=datetime.now(timezone.utc) if deleted else None,
    )


def reason_of(exc_info):
    return exc_info.value.details["reason"]


def test_unscoped_uses_same_permission_for_any_and_own():
    assert PERMS.update_any is PERMS.update_own is Permission.EVENT_UPDATE
    assert PERMS.delete_any is PERMS.delete_own
    assert PERMS.restore_any is PERMS.restore_own


def test_create_requires_permission():
    policy = ownership_policy(PERMS)
    editor = Actor.build("ed", Role.EDITOR, [Permission.EVENT_CREATE])

    policy.can_create(editor, {})

    with pytest.raises(ServiceError) as exc_info:
        policy.can_create(Actor.build("u", Role.USER), {})

    assert exc_info.value.code == ServiceErrorCode.FORBIDDEN
    assert exc_info.value.message == "Permission denied to create event"
    assert reason_of(exc_info) == "MISSING_PERMISSION"


def test_view_denies_deleted_records_even_for_privileged_actor():
    policy = ownership_policy(PERMS)
    everything = Actor.build("sa", Role.SUPER_ADMIN, list(Permission))

    with pytest.raises(ServiceError) as exc_info:
        policy.can_view(everything, record(deleted=True))

    assert reason_of(exc_info) == "DELETED"


def test_view_follows_visibility():
    policy = ownership_policy(PERMS)

    policy.can_view(guest_actor(), record("PUBLIC"))
    with pytest.raises(ServiceError):
        policy.can_view(guest_actor(), record("DRAFT"))


def test_update_and_delete_require_permission():
    policy = ownership_policy(PERMS)
    editor = Actor.build("ed", Role.EDITOR, [Permission.EVENT_UPDATE, Permission.EVENT_DELETE])

    policy.can_update(editor, record())
    policy.can_soft_delete(editor, record())
    policy.can_update_visibility(editor, record(), Visibility.PRIVATE)

    with pytest.raises(ServiceError):
        policy.can_restore(editor, record(deleted=True))


def test_restore_accepts_deleted_records():
    policy = ownership_policy(PERMS)
    editor = Actor.build("ed", Role.EDITOR, [Permission.EVENT_RESTORE])

    policy.can_restore(editor, record(deleted=True))


def test_soft_delete_of_deleted_record_depends_on_permission():
    policy = ownership_policy(PERMS)
    editor = Actor.build("ed", Role.EDITOR, [Permission.EVENT_DELETE])

    policy.can_soft_delete(editor, record(deleted=True))
    with pytest.raises(ServiceError) as exc_info:
        policy.can_soft_delete(guest_actor(), record(deleted=True))

    assert reason_of(exc_info) == "MISSING_PERMISSION"


def test_hard_delete_requires_super_admin():
    policy = ownership_policy(PERMS)
    admin = Actor.build("a", Role.ADMIN, [Permission.EVENT_HARD_DELETE])
    super_admin = Actor.build("sa", Role.SUPER_ADMIN, [Permission.EVENT_HARD_DELETE])

    policy.can_hard_delete(super_admin, record())
    with pytest.raises(ServiceError) as exc_info:
        policy.can_hard_delete(admin, record())

    assert reason_of(exc_info) == "NOT_SUPER_ADMIN"


def test_list_is_open_by_default():
    policy = ownership_policy(PERMS)

    policy.can_list(guest_actor())
    policy.can_search(guest_actor())
    policy.can_count(guest_actor())


def test_list_can_require_authentication():
    policy = ownership_policy(PERMS, list_requires_authentication=True)

    policy.can_list(Actor.build("u", Role.USER))
    for check in (policy.can_list, policy.can_search, policy.can_count):
        with pytest.raises(ServiceError):
            check(guest_actor())


def test_policy_exposes_view_capabilities():
    policy = ownership_policy(PERMS)

    assert policy.view_all == Permission.EVENT_VIEW_ALL
    assert policy.view_private is None


def test_require_authenticated_rejects_disabled_actor():
    with pytest.raises(ServiceError) as exc_info:
        require_authenticated(Actor.build("u", Role.USER, is_active=False))

    assert exc_info.value.message == "Forbidden: not authenticated"


def test_hooks_default_to_none():
    hooks = CrudHooks()

    assert hooks.before_create is None
    assert hooks.build_filters is None
