"""Unit tests for entity permission resolution."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from hospeda.domain.entities.actor import Actor, guest_actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode
from hospeda.domain.services.permission_resolver import (
    EntityPermissionReason,
    PermissionDecision,
    ensure_allowed,
    parse_visibility,
    resolve_hard_delete,
    resolve_permission,
    resolve_scoped,
    resolve_view,
)

VIEW_ALL = Permission.ACCOMMODATION_VIEW_ALL
VIEW_PRIVATE = Permission.ACCOMMODATION_VIEW_PRIVATE
VIEW_DRAFT = Permission.ACCOMMODATION_VIEW_DRAFT


def entity(visibility="PUBLIC", owner_id="owner-1", deleted=False):
    return SimpleNamespace(
        id="e1",
        visibility=visibility,
        owner_id=owner_id,
        deleted_at=datetime.now(timezone.utc) if deleted else None,
    )


def actor(*permissions, id="someone", role=Role.USER, is_active=True):
    return Actor.build(id, role, permissions, is_active)


class TestResolvePermission:
    """Tests for plain capability checks."""

    def test_allowed_with_permission(self):
        decision = resolve_permission(actor(Permission.TAG_CREATE), Permission.TAG_CREATE)

        assert decision == PermissionDecision(
            True, EntityPermissionReason.PERMISSION, Permission.TAG_CREATE
        )

    def test_denied_without_permission(self):
        decision = resolve_permission(actor(), Permission.TAG_CREATE)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.MISSING_PERMISSION

    def test_disabled_actor_is_denied(self):
        decision = resolve_permission(
            actor(Permission.TAG_CREATE, is_active=False), Permission.TAG_CREATE
        )

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.ACTOR_DISABLED


class TestResolveView:
    """Tests for visibility-based view decisions."""

    def test_public_is_visible_to_guest(self):
        decision = resolve_view(guest_actor(), entity("PUBLIC"), VIEW_ALL)

        assert decision.allowed
        assert decision.reason == EntityPermissionReason.PUBLIC_ACCESS

    def test_private_hidden_from_guest(self):
        decision = resolve_view(guest_actor(), entity("PRIVATE"), VIEW_ALL)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.PRIVATE

    def test_private_visible_to_owner(self):
        decision = resolve_view(actor(id="owner-1"), entity("PRIVATE"), VIEW_ALL)

        assert decision.allowed
        assert decision.reason == EntityPermissionReason.OWNER

    @pytest.mark.parametrize("permission", [VIEW_ALL, VIEW_PRIVATE])
    def test_private_visible_with_permission(self, permission):
        decision = resolve_view(actor(permission), entity("PRIVATE"), VIEW_ALL, VIEW_PRIVATE)

        assert decision.allowed
        assert decision.reason == EntityPermissionReason.PERMISSION

    def test_draft_hidden_from_owner(self):
        """Owning a draft is not enough to see it."""
        decision = resolve_view(actor(id="owner-1"), entity("DRAFT"), VIEW_ALL)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.DRAFT

    @pytest.mark.parametrize("permission", [VIEW_ALL, VIEW_DRAFT])
    def test_draft_visible_with_permission(self, permission):
        decision = resolve_view(
            actor(permission), entity("DRAFT"), VIEW_ALL, VIEW_PRIVATE, VIEW_DRAFT
        )

        assert decision.allowed

    def test_view_private_does_not_unlock_drafts(self):
        decision = resolve_view(
            actor(VIEW_PRIVATE), entity("DRAFT"), VIEW_ALL, VIEW_PRIVATE, VIEW_DRAFT
        )

        assert not decision.allowed

    def test_unknown_visibility_is_denied(self):
        decision = resolve_view(actor(VIEW_ALL), entity("SECRET"), VIEW_ALL)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.UNKNOWN_VISIBILITY

    def test_disabled_actor_sees_nothing(self):
        decision = resolve_view(actor(is_active=False), entity("PUBLIC"), VIEW_ALL)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.ACTOR_DISABLED


class TestResolveScoped:
    """Tests for the ownership-vs-any rule."""

    ANY = Permission.ACCOMMODATION_UPDATE_ANY
    OWN = Permission.ACCOMMODATION_UPDATE_OWN

    def test_any_permission_allows_every_record(self):
        decision = resolve_scoped(actor(self.ANY), entity(owner_id="x"), self.ANY, self.OWN)

        assert decision.allowed
        assert decision.reason == EntityPermissionReason.PERMISSION

    def test_own_permission_allows_owned_record(self):
        decision = resolve_scoped(
            actor(self.OWN, id="owner-1"), entity(), self.ANY, self.OWN
        )

        assert decision.allowed
        assert decision.reason == EntityPermissionReason.OWNER

    def test_own_permission_denies_foreign_record(self):
        decision = resolve_scoped(actor(self.OWN, id="intruder"), entity(), self.ANY, self.OWN)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.DENIED

    def test_no_permission(self):
        decision = resolve_scoped(actor(id="owner-1"), entity(), self.ANY, self.OWN)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.MISSING_PERMISSION

    def test_deleted_record_is_denied(self):
        decision = resolve_scoped(actor(self.ANY), entity(deleted=True), self.ANY, self.OWN)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.DELETED

    def test_deleted_record_allowed_for_restore(self):
        decision = resolve_scoped(
            actor(self.ANY), entity(deleted=True), self.ANY, self.OWN, allow_deleted=True
        )

        assert decision.allowed


class TestResolveHardDelete:
    """Tests for hard delete decisions."""

    PERM = Permission.ACCOMMODATION_HARD_DELETE

    def test_super_admin_with_permission(self):
        decision = resolve_hard_delete(actor(self.PERM, role=Role.SUPER_ADMIN), entity(), self.PERM)

        assert decision.allowed
        assert decision.reason == EntityPermissionReason.SUPER_ADMIN

    def test_admin_is_not_enough(self):
        decision = resolve_hard_delete(actor(self.PERM, role=Role.ADMIN), entity(), self.PERM)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.NOT_SUPER_ADMIN

    def test_super_admin_without_permission(self):
        decision = resolve_hard_delete(actor(role=Role.SUPER_ADMIN), entity(), self.PERM)

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.MISSING_PERMISSION

    def test_soft_deleted_record_is_denied(self):
        decision = resolve_hard_delete(
            actor(self.PERM, role=Role.SUPER_ADMIN), entity(deleted=True), self.PERM
        )

        assert not decision.allowed
        assert decision.reason == EntityPermissionReason.DELETED


def test_ensure_allowed_passes_allowed_decision():
    ensure_allowed(PermissionDecision(True, EntityPermissionReason.PERMISSION))


def test_ensure_allowed_raises_forbidden_with_reason():
    with pytest.raises(ServiceError) as exc_info:
        ensure_allowed(PermissionDecision(False, EntityPermissionReason.DRAFT), "Hidden")

    assert exc_info.value.code == ServiceErrorCode.FORBIDDEN
    assert exc_info.value.message == "Hidden"
    assert exc_info.value.details == {"reason": "DRAFT"}


def test_parse_visibility():
    assert parse_visibility("PRIVATE").value == "PRIVATE"
    assert parse_visibility("bogus") is None
    assert parse_visibility(None) is None
