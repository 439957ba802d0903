"""Tag service."""

from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode
from hospeda.domain.services.entity_policy import (
    CrudHooks,
    EntityPermissions,
    ownership_policy,
)
from hospeda.infrastructure.api.schemas.tag_schemas import TagCreate, TagSearch, TagUpdate
from hospeda.infrastructure.persistence.models import TagModel

# Restore reuses tag.delete; hard delete additionally needs SUPER_ADMIN
TAG_PERMISSIONS = EntityPermissions.unscoped(
    "tag",
    create=Permission.TAG_CREATE,
    update=Permission.TAG_UPDATE,
    delete=Permission.TAG_DELETE,
    restore=Permission.TAG_DELETE,
    hard_delete=Permission.TAG_DELETE,
)


class TagService(CrudService[TagModel]):
    """CRUD for tags. Tag names are unique."""

    def __init__(self, ctx: ServiceContext, repository: Any) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name="tag",
            create_schema=TagCreate,
            update_schema=TagUpdate,
            search_schema=TagSearch,
            policy=ownership_policy(TAG_PERMISSIONS),
            hooks=CrudHooks(
                before_create=self._before_create,
                before_update=self._before_update,
                build_filters=self._build_filters,
            ),
        )

    async def _ensure_unique_name(self, name: str, exclude_id: str | None = None) -> None:
        filters: dict[str, Any] = {"name": name}
        if exclude_id is not None:
            filters["id__ne"] = exclude_id
        if await self.repository.exists(filters):
            raise ServiceError(ServiceErrorCode.ALREADY_EXISTS, f"Tag '{name}' already exists")

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        await self._ensure_unique_name(data["name"])
        data["slug"] = await self.unique_slug("", data["name"])
        return data

    async def _before_update(
        self,
        entity: TagModel,
        data: dict[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        if data.get("name"):
            await self._ensure_unique_name(data["name"], exclude_id=entity.id)
            data["slug"] = await self.unique_slug("", data["name"], exclude_id=entity.id)
        return data

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        return {"name__contains": params.get("name"), "color": params.get("color")}
