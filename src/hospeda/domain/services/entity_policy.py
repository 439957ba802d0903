"""Per-entity policies and lifecycle hooks.

A ``CrudPolicy`` bundles the permission predicates of one entity type and a
``CrudHooks`` bundles its lifecycle callbacks. The generic CRUD service is
parameterized by both, so each entity's rules can be built and tested on
their own.

Predicates return ``None`` when the action is allowed and raise
``ServiceError(FORBIDDEN)`` when it is not.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import is_deleted
from hospeda.domain.services.permission_resolver import (
    EntityPermissionReason,
    ensure_allowed,
    resolve_hard_delete,
    resolve_permission,
    resolve_scoped,
    resolve_view,
)

ActorCheck = Callable[[Actor], None]
DataCheck = Callable[[Actor, dict[str, Any]], None]
EntityCheck = Callable[[Actor, Any], None]
VisibilityCheck = Callable[[Actor, Any, Visibility], None]


@dataclass(frozen=True)
class EntityPermissions:
    """Capabilities governing each action on one entity type.

    Entity types without ownership scoping use the same permission for the
    ``_any`` and ``_own`` variants (see ``unscoped``).
    """

    entity: str
    create: Permission
    update_any: Permission
    update_own: Permission
    delete_any: Permission
    delete_own: Permission
    restore_any: Permission
    restore_own: Permission
    hard_delete: Permission
    view_all: Permission | None = None
    view_private: Permission | None = None
    view_draft: Permission | None = None

    @classmethod
    def unscoped(
        cls,
        entity: str,
        *,
        create: Permission,
        update: Permission,
        delete: Permission,
        restore: Permission,
        hard_delete: Permission,
        view_all: Permission | None = None,
        view_private: Permission | None = None,
        view_draft: Permission | None = None,
    ) -> "EntityPermissions":
        return cls(
            entity=entity,
            create=create,
            update_any=update,
            update_own=update,
            delete_any=delete,
            delete_own=delete,
            restore_any=restore,
            restore_own=restore,
            hard_delete=hard_delete,
            view_all=view_all,
            view_private=view_private,
            view_draft=view_draft,
        )


def _allow_all(*args: Any) -> None:
    return None


@dataclass(frozen=True)
class CrudPolicy:
    """Permission predicates used by the CRUD pipeline."""

    can_create: DataCheck
    can_view: EntityCheck
    can_update: EntityCheck
    can_soft_delete: EntityCheck
    can_restore: EntityCheck
    can_hard_delete: EntityCheck
    can_update_visibility: VisibilityCheck
    can_list: ActorCheck = _allow_all
    can_search: ActorCheck = _allow_all
    can_count: ActorCheck = _allow_all
    view_all: Permission | None = None
    view_private: Permission | None = None
    view_draft: Permission | None = None


def require_authenticated(actor: Actor, message: str = "Forbidden: not authenticated") -> None:
    """Reject guests and disabled actors.

    Raises:
        ServiceError: FORBIDDEN for a guest or disabled actor.
    """
    if actor.is_guest or not actor.is_active:
        raise ServiceError(ServiceErrorCode.FORBIDDEN, message)


def ownership_policy(
    perms: EntityPermissions,
    *,
    list_requires_authentication: bool = False,
) -> CrudPolicy:
    """Build the standard policy for an entity type.

    Update, soft delete, restore and visibility changes follow the
    ownership-vs-any rule. Hard delete requires SUPER_ADMIN plus the
    hard-delete capability. View follows the visibility rules and denies
    soft-deleted records.

    Args:
        perms: The entity's capabilities.
        list_requires_authentication: Reject guests on list/search/count.

    Returns:
        The policy.
    """
    name = perms.entity

    def can_create(actor: Actor, data: dict[str, Any]) -> None:
        ensure_allowed(resolve_permission(actor, perms.create), f"Permission denied to create {name}")

    def can_view(actor: Actor, entity: Any) -> None:
        if is_deleted(entity):
            raise ServiceError(
                ServiceErrorCode.FORBIDDEN,
                f"Permission denied to view {name}",
                {"reason": EntityPermissionReason.DELETED.value},
            )
        ensure_allowed(
            resolve_view(actor, entity, perms.view_all, perms.view_private, perms.view_draft),
            f"Permission denied to view {name}",
        )

    def can_update(actor: Actor, entity: Any) -> None:
        ensure_allowed(
            resolve_scoped(actor, entity, perms.update_any, perms.update_own),
            f"Permission denied to update {name}",
        )

    def can_soft_delete(actor: Actor, entity: Any) -> None:
        ensure_allowed(
            resolve_scoped(
                actor, entity, perms.delete_any, perms.delete_own, allow_deleted=True
            ),
            f"Permission denied to delete {name}",
        )

    def can_restore(actor: Actor, entity: Any) -> None:
        ensure_allowed(
            resolve_scoped(
                actor, entity, perms.restore_any, perms.restore_own, allow_deleted=True
            ),
            f"Permission denied to restore {name}",
        )

    def can_hard_delete(actor: Actor, entity: Any) -> None:
        ensure_allowed(
            resolve_hard_delete(actor, entity, perms.hard_delete),
            f"Permission denied to permanently delete {name}",
        )

    def can_update_visibility(actor: Actor, entity: Any, visibility: Visibility) -> None:
        ensure_allowed(
            resolve_scoped(actor, entity, perms.update_any, perms.update_own),
            f"Permission denied to change visibility of {name}",
        )

    def can_list(actor: Actor) -> None:
        if list_requires_authentication:
            require_authenticated(actor)

    return CrudPolicy(
        can_create=can_create,
        can_view=can_view,
        can_update=can_update,
        can_soft_delete=can_soft_delete,
        can_restore=can_restore,
        can_hard_delete=can_hard_delete,
        can_update_visibility=can_update_visibility,
        can_list=can_list,
        can_search=can_list,
        can_count=can_list,
        view_all=perms.view_all,
        view_private=perms.view_private,
        view_draft=perms.view_draft,
    )


DataHook = Callable[[dict[str, Any], Actor], Awaitable[dict[str, Any]]]
UpdateHook = Callable[[Any, dict[str, Any], Actor], Awaitable[dict[str, Any]]]
EntityHook = Callable[[Any, Actor], Awaitable[Any]]
FilterHook = Callable[[dict[str, Any], Actor], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class CrudHooks:
    """Lifecycle callbacks run by the CRUD pipeline.

    Every hook is optional. ``before_*`` hooks return the (possibly
    enriched) data to persist; ``after_*`` hooks run once the write has
    completed and before the call returns, so side effects such as rating
    recomputation are visible to the caller. ``build_filters`` turns
    validated search params into repository filters.
    """

    normalize_create: DataHook | None = None
    normalize_update: DataHook | None = None
    before_create: DataHook | None = None
    before_update: UpdateHook | None = None
    after_create: EntityHook | None = None
    after_update: EntityHook | None = None
    after_soft_delete: EntityHook | None = None
    after_restore: EntityHook | None = None
    after_hard_delete: EntityHook | None = None
    build_filters: FilterHook | None = None
