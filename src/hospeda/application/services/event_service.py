"""Event service.

Events are managed by editors. Actors without ``event.viewAll`` only ever
see PUBLIC events in listings.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.enums import EventCategory
from hospeda.domain.entities.pagination import PaginatedResult, PaginationParams
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode, ServiceResult
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import has_permission
from hospeda.domain.services.entity_policy import (
    CrudHooks,
    EntityPermissions,
    ownership_policy,
)
from hospeda.infrastructure.api.schemas.event_schemas import (
    EventCreate,
    EventSearch,
    EventUpdate,
)
from hospeda.infrastructure.persistence.models import EventModel

EVENT_PERMISSIONS = EntityPermissions.unscoped(
    "event",
    create=Permission.EVENT_CREATE,
    update=Permission.EVENT_UPDATE,
    delete=Permission.EVENT_DELETE,
    restore=Permission.EVENT_RESTORE,
    hard_delete=Permission.EVENT_HARD_DELETE,
    view_all=Permission.EVENT_VIEW_ALL,
    view_private=Permission.EVENT_VIEW_PRIVATE,
    view_draft=Permission.EVENT_VIEW_DRAFT,
)


class EventService(CrudService[EventModel]):
    """CRUD and queries for events."""

    def __init__(self, ctx: ServiceContext, repository: Any) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name="event",
            create_schema=EventCreate,
            update_schema=EventUpdate,
            search_schema=EventSearch,
            policy=ownership_policy(EVENT_PERMISSIONS),
            hooks=CrudHooks(
                before_create=self._before_create,
                before_update=self._before_update,
                build_filters=self._build_filters,
            ),
        )

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        data["author_id"] = actor.id
        data["slug"] = await self.unique_slug(data["category"], data["name"])
        return data

    async def _before_update(
        self,
        entity: EventModel,
        data: dict[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        starts_at = data.get("starts_at") or entity.starts_at
        ends_at = data.get("ends_at", entity.ends_at)
        if ends_at is not None and _utc(ends_at) < _utc(starts_at):
            raise ServiceError(
                ServiceErrorCode.VALIDATION_ERROR,
                "ends_at must not be before starts_at",
            )
        if data.get("name") or data.get("category"):
            data["slug"] = await self.unique_slug(
                data.get("category") or entity.category,
                data.get("name") or entity.name,
                exclude_id=entity.id,
            )
        return data

    def _restrict_to_public(self, filters: dict[str, Any], actor: Actor) -> dict[str, Any]:
        if not has_permission(actor, Permission.EVENT_VIEW_ALL):
            filters["visibility"] = Visibility.PUBLIC.value
        return filters

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        filters = {
            "name__contains": params.get("name"),
            "category": params.get("category"),
            "author_id": params.get("author_id"),
            "city__contains": params.get("city"),
            "is_featured": params.get("is_featured"),
            "starts_at__gte": params.get("starts_after"),
            "starts_at__lte": params.get("starts_before"),
        }
        return self._restrict_to_public(filters, actor)

    async def _list_where(
        self,
        action: str,
        actor: Actor | None,
        filters: dict[str, Any],
        pagination: PaginationParams | None,
        **options: Any,
    ) -> ServiceResult[PaginatedResult[EventModel]]:
        async def execute(actor: Actor) -> PaginatedResult[EventModel]:
            self.policy.can_list(actor)
            page = pagination or PaginationParams()
            return await self._paginate(
                actor, self._restrict_to_public(dict(filters), actor), page, **options
            )

        return await self._run(action, actor, {"filters": filters}, execute)

    async def get_upcoming(
        self,
        actor: Actor | None,
        days_ahead: int = 30,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[EventModel]]:
        """List events starting between now and ``days_ahead`` days from now, soonest first."""
        now = datetime.now(timezone.utc)
        filters = {
            "starts_at__gte": now,
            "starts_at__lte": now + timedelta(days=days_ahead),
        }
        return await self._list_where(
            "getUpcoming", actor, filters, pagination, order_by="starts_at", descending=False
        )

    async def get_by_category(
        self,
        actor: Actor | None,
        category: EventCategory | str,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[EventModel]]:
        """List events of one category."""
        value = category.value if isinstance(category, EventCategory) else category
        return await self._list_where("getByCategory", actor, {"category": value}, pagination)

    async def get_by_author(
        self,
        actor: Actor | None,
        author_id: str,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[EventModel]]:
        """List events created by one author."""
        return await self._list_where("getByAuthor", actor, {"author_id": author_id}, pagination)


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
