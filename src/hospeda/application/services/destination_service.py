"""Destination service.

Destinations are curated by staff, so their permissions are not scoped by
ownership.
"""

from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceResult
from hospeda.domain.services.entity_policy import (
    CrudHooks,
    EntityPermissions,
    ownership_policy,
)
from hospeda.domain.services.visibility_filter import filter_visible
from hospeda.infrastructure.api.schemas.destination_schemas import (
    DestinationCreate,
    DestinationSearch,
    DestinationUpdate,
)
from hospeda.infrastructure.persistence.models import AccommodationModel, DestinationModel

DESTINATION_PERMISSIONS = EntityPermissions.unscoped(
    "destination",
    create=Permission.DESTINATION_CREATE,
    update=Permission.DESTINATION_UPDATE,
    delete=Permission.DESTINATION_DELETE,
    restore=Permission.DESTINATION_RESTORE,
    hard_delete=Permission.DESTINATION_HARD_DELETE,
    view_all=Permission.DESTINATION_VIEW_ALL,
    view_private=Permission.DESTINATION_VIEW_PRIVATE,
    view_draft=Permission.DESTINATION_VIEW_DRAFT,
)


class DestinationService(CrudService[DestinationModel]):
    """CRUD and queries for destinations.

    Args:
        ctx: Service context.
        repository: Destination repository.
        accommodation_repository: Accommodation repository used by
            ``get_accommodations``.
    """

    def __init__(
        self,
        ctx: ServiceContext,
        repository: Any,
        accommodation_repository: Any | None = None,
    ) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name="destination",
            create_schema=DestinationCreate,
            update_schema=DestinationUpdate,
            search_schema=DestinationSearch,
            policy=ownership_policy(DESTINATION_PERMISSIONS),
            hooks=CrudHooks(
                before_create=self._before_create,
                before_update=self._before_update,
                build_filters=self._build_filters,
            ),
        )
        self.accommodation_repository = accommodation_repository

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        if data.get("country"):
            data["country"] = data["country"].upper()
        data["slug"] = await self.unique_slug("", data["name"])
        return data

    async def _before_update(
        self,
        entity: DestinationModel,
        data: dict[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        if data.get("country"):
            data["country"] = data["country"].upper()
        if data.get("name"):
            data["slug"] = await self.unique_slug("", data["name"], exclude_id=entity.id)
        return data

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        country = params.get("country")
        return {
            "name__contains": params.get("name"),
            "country": country.upper() if country else None,
            "city__contains": params.get("city"),
            "is_featured": params.get("is_featured"),
            "average_rating__gte": params.get("min_rating"),
            "average_rating__lte": params.get("max_rating"),
        }

    async def get_accommodations(
        self,
        actor: Actor | None,
        destination_id: str,
    ) -> ServiceResult[list[AccommodationModel]]:
        """List the accommodations of a destination visible to the actor.

        The destination itself must exist and be visible to the actor.
        """

        async def execute(actor: Actor) -> list[AccommodationModel]:
            destination = await self._get_active(destination_id)
            self.policy.can_view(actor, destination)
            if self.accommodation_repository is None:
                return []
            items, _ = await self.accommodation_repository.find_all(
                {"destination_id": destination_id}
            )
            return filter_visible(
                actor,
                items,
                Permission.ACCOMMODATION_VIEW_ALL,
                logger=self.logger,
                entity_name="accommodation",
                view_private=Permission.ACCOMMODATION_VIEW_PRIVATE,
                view_draft=Permission.ACCOMMODATION_VIEW_DRAFT,
            )

        return await self._run("getAccommodations", actor, {"id": destination_id}, execute)
