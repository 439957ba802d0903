"""Typed accessors over an actor's capability set.

All permission checks in the service layer go through these helpers rather
than testing membership of raw strings.
"""

from typing import Any

from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission


def has_permission(actor: Actor, permission: Permission) -> bool:
    """Check whether the actor holds a permission."""
    return permission in actor.permissions


def has_any_permission(actor: Actor, *permissions: Permission) -> bool:
    """Check whether the actor holds at least one of the permissions."""
    return any(p in actor.permissions for p in permissions)


def has_all_permissions(actor: Actor, *permissions: Permission) -> bool:
    """Check whether the actor holds every one of the permissions."""
    return all(p in actor.permissions for p in permissions)


def is_owner(actor: Actor, entity: Any) -> bool:
    """Check whether the actor owns the entity.

    Guests own nothing, and an entity without an owner is owned by nobody.
    """
    owner_id = getattr(entity, "owner_id", None)
    return actor.id is not None and owner_id is not None and actor.id == owner_id


def is_deleted(entity: Any) -> bool:
    """Check whether the entity is soft-deleted."""
    return getattr(entity, "deleted_at", None) is not None

