"""Visibility filtering of result sets.

Applied by list and search operations after the repository has returned a
page of records. The filter keeps input order, never mutates its input and
logs one grant or denial per record.
"""

from collections.abc import Sequence
from typing import Any, TypeVar

from hospeda.core.logging import ServiceLogger
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.services.permission_resolver import PermissionDecision, resolve_view

T = TypeVar("T")


def is_visible(
    actor: Actor,
    entity: Any,
    view_all: Permission | None,
    view_private: Permission | None = None,
    view_draft: Permission | None = None,
) -> PermissionDecision:
    """Decide whether a single record is visible to the actor."""
    return resolve_view(actor, entity, view_all, view_private, view_draft)


def filter_visible(
    actor: Actor,
    entities: Sequence[T],
    view_all: Permission | None,
    *,
    logger: ServiceLogger,
    entity_name: str,
    view_private: Permission | None = None,
    view_draft: Permission | None = None,
) -> list[T]:
    """Return the records the actor may see.

    Args:
        actor: The calling actor.
        entities: Candidate records.
        view_all: All-scope view capability of the entity type.
        logger: Service logger receiving one entry per record.
        entity_name: Entity name used in log entries.
        view_private: Extra capability that unlocks PRIVATE records.
        view_draft: Extra capability that unlocks DRAFT records.

    Returns:
        A new list with the visible records, in input order.
    """
    visible: list[T] = []
    for entity in entities:
        decision = is_visible(actor, entity, view_all, view_private, view_draft)
        logger.log_permission(
            entity_name,
            "view",
            actor.id,
            decision.allowed,
            decision.reason.value,
            entity_id=getattr(entity, "id", None),
        )
        if decision.allowed:
            visible.append(entity)
    return visible
