"""Accommodation service.

Hosts manage their own listings (``.own`` permissions); admins manage every
listing (``.any`` permissions). New listings start PRIVATE and only become
PUBLIC through a visibility change by someone allowed to publish.
"""

from dataclasses import replace
from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.pagination import PaginatedResult, PaginationParams
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode, ServiceResult
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import has_any_permission
from hospeda.domain.services.entity_policy import (
    CrudHooks,
    EntityPermissions,
    ownership_policy,
)
from hospeda.domain.services.permission_resolver import ensure_allowed, resolve_scoped
from hospeda.infrastructure.api.schemas.accommodation_schemas import (
    AccommodationCreate,
    AccommodationSearch,
    AccommodationUpdate,
)
from hospeda.infrastructure.persistence.models import AccommodationModel

ACCOMMODATION_PERMISSIONS = EntityPermissions(
    entity="accommodation",
    create=Permission.ACCOMMODATION_CREATE,
    update_any=Permission.ACCOMMODATION_UPDATE_ANY,
    update_own=Permission.ACCOMMODATION_UPDATE_OWN,
    delete_any=Permission.ACCOMMODATION_DELETE_ANY,
    delete_own=Permission.ACCOMMODATION_DELETE_OWN,
    restore_any=Permission.ACCOMMODATION_RESTORE_ANY,
    restore_own=Permission.ACCOMMODATION_RESTORE_OWN,
    hard_delete=Permission.ACCOMMODATION_HARD_DELETE,
    view_all=Permission.ACCOMMODATION_VIEW_ALL,
    view_private=Permission.ACCOMMODATION_VIEW_PRIVATE,
    view_draft=Permission.ACCOMMODATION_VIEW_DRAFT,
)


def can_update_accommodation_visibility(
    actor: Actor,
    entity: Any,
    visibility: Visibility,
) -> None:
    """Owners or admins may change visibility; making a listing PUBLIC also needs publish rights.

    Raises:
        ServiceError: FORBIDDEN when denied.
    """
    ensure_allowed(
        resolve_scoped(
            actor,
            entity,
            Permission.ACCOMMODATION_UPDATE_ANY,
            Permission.ACCOMMODATION_UPDATE_OWN,
        ),
        "Permission denied to change visibility of accommodation",
    )
    if visibility == Visibility.PUBLIC and not has_any_permission(
        actor,
        Permission.ACCOMMODATION_PUBLISH,
        Permission.ACCOMMODATION_UPDATE_ANY,
    ):
        raise ServiceError(
            ServiceErrorCode.FORBIDDEN,
            "Permission denied to publish accommodation",
            {"reason": "MISSING_PERMISSION"},
        )


class AccommodationService(CrudService[AccommodationModel]):
    """CRUD and queries for accommodations.

    Args:
        ctx: Service context.
        repository: Accommodation repository.
        destination_repository: Optional destination repository; when given,
            the destination's ``accommodations_count`` is kept up to date.
    """

    def __init__(
        self,
        ctx: ServiceContext,
        repository: Any,
        destination_repository: Any | None = None,
    ) -> None:
        policy = replace(
            ownership_policy(ACCOMMODATION_PERMISSIONS),
            can_update_visibility=can_update_accommodation_visibility,
        )
        super().__init__(
            ctx,
            repository,
            entity_name="accommodation",
            create_schema=AccommodationCreate,
            update_schema=AccommodationUpdate,
            search_schema=AccommodationSearch,
            policy=policy,
            hooks=CrudHooks(
                before_create=self._before_create,
                before_update=self._before_update,
                after_create=self._sync_destination,
                after_soft_delete=self._sync_destination,
                after_restore=self._sync_destination,
                after_hard_delete=self._sync_destination,
                build_filters=self._build_filters,
            ),
        )
        self.destination_repository = destination_repository

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        # Only admins may create listings on behalf of another host
        if not has_any_permission(actor, Permission.ACCOMMODATION_UPDATE_ANY):
            data["owner_id"] = actor.id
        data.setdefault("owner_id", actor.id)
        data.setdefault("visibility", Visibility.PRIVATE.value)
        data["slug"] = await self.unique_slug(data["type"], data["name"])
        return data

    async def _before_update(
        self,
        entity: AccommodationModel,
        data: dict[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        if "name" in data or "type" in data:
            data["slug"] = await self.unique_slug(
                data.get("type") or entity.type,
                data.get("name") or entity.name,
                exclude_id=entity.id,
            )
        return data

    async def _sync_destination(self, entity: AccommodationModel, actor: Actor) -> None:
        if self.destination_repository is None or not entity.destination_id:
            return
        count = await self.repository.count({"destination_id": entity.destination_id})
        await self.destination_repository.update(
            entity.destination_id,
            {"accommodations_count": count},
        )

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        return {
            "name__contains": params.get("name"),
            "slug": params.get("slug"),
            "type": params.get("type"),
            "destination_id": params.get("destination_id"),
            "owner_id": params.get("owner_id"),
            "is_featured": params.get("is_featured"),
            "price__gte": params.get("min_price"),
            "price__lte": params.get("max_price"),
            "average_rating__gte": params.get("min_rating"),
        }

    async def get_by_destination(
        self,
        actor: Actor | None,
        destination_id: str,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[AccommodationModel]]:
        """List the visible accommodations of a destination."""

        async def execute(actor: Actor) -> PaginatedResult[AccommodationModel]:
            self.policy.can_list(actor)
            page = pagination or PaginationParams()
            return await self._paginate(actor, {"destination_id": destination_id}, page)

        return await self._run(
            "getByDestination", actor, {"destination_id": destination_id}, execute
        )

    async def get_top_rated(
        self,
        actor: Actor | None,
        limit: int = 10,
    ) -> ServiceResult[list[AccommodationModel]]:
        """Return the best rated visible accommodations, highest first."""

        async def execute(actor: Actor) -> list[AccommodationModel]:
            self.policy.can_list(actor)
            page = PaginationParams(page=1, page_size=limit)
            result = await self._paginate(actor, {}, page, order_by="average_rating")
            return result.items

        return await self._run("getTopRated", actor, {"limit": limit}, execute)

    async def get_summary(
        self,
        actor: Actor | None,
        accommodation_id: str,
    ) -> ServiceResult[dict[str, Any]]:
        """Return a compact projection of one accommodation."""

        async def execute(actor: Actor) -> dict[str, Any]:
            entity = await self._get_active(accommodation_id)
            self.policy.can_view(actor, entity)
            return {
                "id": entity.id,
                "name": entity.name,
                "slug": entity.slug,
                "type": entity.type,
                "summary": entity.summary,
                "destination_id": entity.destination_id,
                "average_rating": entity.average_rating,
                "reviews_count": entity.reviews_count,
                "is_featured": entity.is_featured,
            }

        return await self._run("getSummary", actor, {"id": accommodation_id}, execute)
