"""Entity permission resolution.

Turns an actor, a record and the relevant capabilities into a
``PermissionDecision`` carrying both the verdict and the reason for it.
Reasons are what gets logged on denial, so each rule reports a distinct one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import has_permission, is_deleted, is_owner


class EntityPermissionReason(str, Enum):
    """Why a permission decision came out the way it did."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    OWNER = "OWNER"
    PERMISSION = "PERMISSION"
    PUBLIC_ACCESS = "PUBLIC_ACCESS"
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    NOT_SUPER_ADMIN = "NOT_SUPER_ADMIN"
    NOT_ADMIN = "NOT_ADMIN"
    DELETED = "DELETED"
    ARCHIVED = "ARCHIVED"
    PRIVATE = "PRIVATE"
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    MISSING_PERMISSION = "MISSING_PERMISSION"
    UNKNOWN_VISIBILITY = "UNKNOWN_VISIBILITY"
    ACTOR_DISABLED = "ACTOR_DISABLED"


@dataclass(frozen=True)
class PermissionDecision:
    """Result of a permission check.

    Attributes:
        allowed: Whether the action is allowed.
        reason: Why it was allowed or denied.
        checked_permission: The capability the decision hinged on, if any.
    """

    allowed: bool
    reason: EntityPermissionReason
    checked_permission: Permission | None = None


def _allow(reason: EntityPermissionReason, permission: Permission | None = None) -> PermissionDecision:
    return PermissionDecision(True, reason, permission)


def _deny(reason: EntityPermissionReason, permission: Permission | None = None) -> PermissionDecision:
    return PermissionDecision(False, reason, permission)


def parse_visibility(value: Any) -> Visibility | None:
    """Coerce a stored visibility value, returning None for unknown values."""
    if isinstance(value, Visibility):
        return value
    try:
        return Visibility(value)
    except ValueError:
        return None


def resolve_permission(actor: Actor, permission: Permission) -> PermissionDecision:
    """Decide a plain, unscoped capability check."""
    if not actor.is_active:
        return _deny(EntityPermissionReason.ACTOR_DISABLED, permission)
    if has_permission(actor, permission):
        return _allow(EntityPermissionReason.PERMISSION, permission)
    return _deny(EntityPermissionReason.MISSING_PERMISSION, permission)


def resolve_view(
    actor: Actor,
    entity: Any,
    view_all: Permission | None,
    view_private: Permission | None = None,
    view_draft: Permission | None = None,
) -> PermissionDecision:
    """Decide whether the actor may see the entity based on its visibility.

    PUBLIC is visible to everyone. PRIVATE is visible to the owner and to
    holders of ``view_all`` or ``view_private``. DRAFT is visible only to
    holders of ``view_all`` or ``view_draft``; owning a draft is not enough.
    Any other value is denied.

    Args:
        actor: The calling actor.
        entity: Record with ``visibility`` and optionally ``owner_id``.
        view_all: All-scope view capability of the entity type.
        view_private: Extra capability that unlocks PRIVATE records.
        view_draft: Extra capability that unlocks DRAFT records.

    Returns:
        The decision.
    """
    if not actor.is_active:
        return _deny(EntityPermissionReason.ACTOR_DISABLED)

    visibility = parse_visibility(getattr(entity, "visibility", None))

    if visibility is Visibility.PUBLIC:
        return _allow(EntityPermissionReason.PUBLIC_ACCESS)

    if visibility is Visibility.PRIVATE:
        for perm in (view_all, view_private):
            if perm is not None and has_permission(actor, perm):
                return _allow(EntityPermissionReason.PERMISSION, perm)
        if is_owner(actor, entity):
            return _allow(EntityPermissionReason.OWNER)
        return _deny(EntityPermissionReason.PRIVATE, view_all)

    if visibility is Visibility.DRAFT:
        for perm in (view_all, view_draft):
            if perm is not None and has_permission(actor, perm):
                return _allow(EntityPermissionReason.PERMISSION, perm)
        return _deny(EntityPermissionReason.DRAFT, view_all)

    return _deny(EntityPermissionReason.UNKNOWN_VISIBILITY)


def resolve_scoped(
    actor: Actor,
    entity: Any,
    any_permission: Permission,
    own_permission: Permission,
    *,
    allow_deleted: bool = False,
) -> PermissionDecision:
    """Decide an action governed by the ownership-vs-any rule.

    Soft-deleted records are denied unless ``allow_deleted`` is set, as it
    is for restore and for soft delete (a repeated delete is a no-op, but
    only for actors who may delete the record).
    """
    if not actor.is_active:
        return _deny(EntityPermissionReason.ACTOR_DISABLED)
    if is_deleted(entity) and not allow_deleted:
        return _deny(EntityPermissionReason.DELETED)
    if has_permission(actor, any_permission):
        return _allow(EntityPermissionReason.PERMISSION, any_permission)
    if has_permission(actor, own_permission):
        if is_owner(actor, entity):
            return _allow(EntityPermissionReason.OWNER, own_permission)
        return _deny(EntityPermissionReason.DENIED, own_permission)
    return _deny(EntityPermissionReason.MISSING_PERMISSION, any_permission)


def resolve_hard_delete(actor: Actor, entity: Any, permission: Permission) -> PermissionDecision:
    """Decide a hard delete.

    Requires both the SUPER_ADMIN role and the explicit hard-delete
    capability. Records that are already soft-deleted are denied.
    """
    if not actor.is_active:
        return _deny(EntityPermissionReason.ACTOR_DISABLED)
    if is_deleted(entity):
        return _deny(EntityPermissionReason.DELETED, permission)
    if actor.role != Role.SUPER_ADMIN:
        return _deny(EntityPermissionReason.NOT_SUPER_ADMIN, permission)
    if not has_permission(actor, permission):
        return _deny(EntityPermissionReason.MISSING_PERMISSION, permission)
    return _allow(EntityPermissionReason.SUPER_ADMIN, permission)


def ensure_allowed(decision: PermissionDecision, message: str = "Permission denied") -> None:
    """Raise FORBIDDEN for a denied decision.

    Raises:
        ServiceError: FORBIDDEN with the denial reason in ``details``.
    """
    if not decision.allowed:
        raise ServiceError(
            ServiceErrorCode.FORBIDDEN,
            message,
            {"reason": decision.reason.value},
        )
