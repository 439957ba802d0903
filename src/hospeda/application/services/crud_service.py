"""Generic permission-aware CRUD service.

Every entity service runs its operations through the same pipeline:
validate input, check the entity policy, normalize, delegate to the
repository, run lifecycle hooks and return a ``ServiceResult``.

The pipeline is configured rather than subclassed: the repository, the
pydantic schemas, the ``CrudPolicy`` and the ``CrudHooks`` are all passed to
the constructor. Subclasses only add entity-specific operations.
"""

from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from hospeda.core.context import ServiceContext
from hospeda.core.logging import ServiceLogger
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.pagination import PaginatedResult, PaginationParams
from hospeda.domain.entities.service_result import (
    CountResult,
    ServiceError,
    ServiceErrorCode,
    ServiceResult,
)
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import is_deleted
from hospeda.domain.services.entity_policy import CrudHooks, CrudPolicy
from hospeda.domain.services.slug_generator import SlugGenerator, generate_slug
from hospeda.domain.services.visibility_filter import filter_visible

ModelT = TypeVar("ModelT")
R = TypeVar("R")


def normalize_values(data: dict[str, Any]) -> dict[str, Any]:
    """Trim strings and convert aware datetimes to UTC."""
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            value = value.strip()
        elif isinstance(value, datetime) and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        normalized[key] = value
    return normalized


def summarize(result: Any) -> Any:
    """Compact representation of a service result for log entries."""
    if isinstance(result, PaginatedResult):
        return {"items": len(result.items), "total": result.total, "page": result.page}
    if isinstance(result, CountResult):
        return {"count": result.count}
    if isinstance(result, list):
        return {"items": len(result)}
    entity_id = getattr(result, "id", None)
    if entity_id is not None:
        return {"id": entity_id}
    return result


class CrudService(Generic[ModelT]):
    """CRUD pipeline for one entity type.

    Args:
        ctx: Service context (logger, settings).
        repository: Data-access collaborator for the entity's table.
        entity_name: Entity name used in messages and log entries.
        create_schema: Pydantic model validating create input.
        update_schema: Pydantic model validating partial update input.
        search_schema: Pydantic model validating search params (including
            ``page``/``page_size``).
        policy: Permission predicates.
        hooks: Lifecycle hooks.
    """

    def __init__(
        self,
        ctx: ServiceContext,
        repository: Any,
        *,
        entity_name: str,
        create_schema: type[BaseModel],
        update_schema: type[BaseModel],
        search_schema: type[BaseModel],
        policy: CrudPolicy,
        hooks: CrudHooks | None = None,
    ) -> None:
        self.ctx = ctx
        self.repository = repository
        self.entity_name = entity_name
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.search_schema = search_schema
        self.policy = policy
        self.hooks = hooks or CrudHooks()

    @property
    def logger(self) -> ServiceLogger:
        return self.ctx.logger

    @property
    def label(self) -> str:
        return self.entity_name.replace("_", " ").capitalize()

    async def _run(
        self,
        action: str,
        actor: Actor | None,
        params: dict[str, Any],
        execute: Callable[[Actor], Awaitable[R]],
    ) -> ServiceResult[R]:
        """Run one operation inside the service catch boundary.

        Expected failures (``ServiceError``, pydantic validation errors) are
        translated to their error code. Anything else is logged with its
        traceback and surfaced as INTERNAL_ERROR with a generic message.
        """
        self.logger.log_method_start(self.entity_name, action, params)
        try:
            if actor is None:
                raise ServiceError(ServiceErrorCode.UNAUTHORIZED, "Actor is required")
            result = await execute(actor)
        except ServiceError as e:
            self.logger.log_error(self.entity_name, action, e, params)
            if e.code == ServiceErrorCode.FORBIDDEN:
                reason = e.details.get("reason") if isinstance(e.details, dict) else None
                self.logger.log_permission(
                    self.entity_name,
                    action,
                    actor.id if actor else None,
                    False,
                    reason or e.message,
                    entity_id=params.get("id"),
                )
            return ServiceResult.from_error(e)
        except ValidationError as e:
            self.logger.log_error(self.entity_name, action, e, params)
            return ServiceResult.fail(
                ServiceErrorCode.VALIDATION_ERROR,
                f"Invalid {self.entity_name} data",
                e.errors(include_url=False, include_context=False),
            )
        except Exception as e:
            self.logger.log_error(self.entity_name, action, e, params, unexpected=True)
            return ServiceResult.fail(
                ServiceErrorCode.INTERNAL_ERROR,
                "An unexpected error occurred",
            )

        self.logger.log_method_end(self.entity_name, action, summarize(result))
        return ServiceResult.ok(result)

    # Helpers

    @staticmethod
    def _as_dict(data: Any) -> dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ServiceError(ServiceErrorCode.VALIDATION_ERROR, "Input must be an object")
        return dict(data)

    def _validate_create(self, data: Any) -> dict[str, Any]:
        model = self.create_schema.model_validate(self._as_dict(data))
        return model.model_dump(exclude_none=True)

    def _validate_update(self, data: Any) -> dict[str, Any]:
        model = self.update_schema.model_validate(self._as_dict(data))
        return model.model_dump(exclude_unset=True)

    def _validate_search(self, params: Any) -> tuple[dict[str, Any], PaginationParams]:
        values = self.search_schema.model_validate(self._as_dict(params)).model_dump()
        page = values.pop("page", None) or 1
        page_size = values.pop("page_size", None) or self.ctx.settings.default_page_size
        return values, PaginationParams(page=page, page_size=page_size)

    async def _get_active(self, entity_id: str) -> ModelT:
        """Load a live record or raise NOT_FOUND."""
        entity = await self.repository.find_by_id(entity_id, include_deleted=True)
        if entity is None or is_deleted(entity):
            raise ServiceError(ServiceErrorCode.NOT_FOUND, f"{self.label} not found")
        return entity

    async def _get_any(self, entity_id: str) -> ModelT:
        """Load a record, soft-deleted or not, or raise NOT_FOUND."""
        entity = await self.repository.find_by_id(entity_id, include_deleted=True)
        if entity is None:
            raise ServiceError(ServiceErrorCode.NOT_FOUND, f"{self.label} not found")
        return entity

    def _filter_visible(self, actor: Actor, items: list[ModelT]) -> list[ModelT]:
        return filter_visible(
            actor,
            items,
            self.policy.view_all,
            logger=self.logger,
            entity_name=self.entity_name,
            view_private=self.policy.view_private,
            view_draft=self.policy.view_draft,
        )

    async def _paginate(
        self,
        actor: Actor,
        filters: dict[str, Any],
        page: PaginationParams,
        **options: Any,
    ) -> PaginatedResult[ModelT]:
        """Fetch one page from the repository and apply the visibility filter."""
        items, total = await self.repository.find_all(filters, page, **options)
        return PaginatedResult(
            items=self._filter_visible(actor, items),
            total=total,
            page=page.page,
            page_size=page.page_size,
        )

    async def unique_slug(
        self,
        prefix: str,
        name: str,
        exclude_id: str | None = None,
    ) -> str:
        """Generate a slug from ``prefix`` and ``name`` that no other record uses.

        Raises:
            ServiceError: VALIDATION_ERROR when no slug can be built.
        """
        try:
            base = generate_slug(prefix, name)
        except ValueError as e:
            raise ServiceError(ServiceErrorCode.VALIDATION_ERROR, str(e)) from e

        async def taken(candidate: str) -> bool:
            filters: dict[str, Any] = {"slug": candidate}
            if exclude_id is not None:
                filters["id__ne"] = exclude_id
            return await self.repository.exists(filters)

        return await SlugGenerator.generate_unique(base, taken)

    async def build_search_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        """Turn validated search params into repository filters.

        The default passes non-null params through as equality filters.
        Services customize this with the ``build_filters`` hook.
        """
        if self.hooks.build_filters is not None:
            return await self.hooks.build_filters(dict(params), actor)
        return {key: value for key, value in params.items() if value is not None}

    # Operations

    async def create(self, actor: Actor | None, data: Any) -> ServiceResult[ModelT]:
        """Create a record.

        Args:
            actor: The calling actor.
            data: Create input (dict or pydantic model).

        Returns:
            ServiceResult with the created record.
        """

        async def execute(actor: Actor) -> ModelT:
            values = self._validate_create(data)
            self.policy.can_create(actor, values)
            values = normalize_values(values)
            if self.hooks.normalize_create is not None:
                values = await self.hooks.normalize_create(values, actor)
            if self.hooks.before_create is not None:
                values = await self.hooks.before_create(values, actor)
            values["created_by_id"] = actor.id
            values["updated_by_id"] = actor.id
            entity = await self.repository.create(values)
            if self.hooks.after_create is not None:
                await self.hooks.after_create(entity, actor)
            return entity

        return await self._run("create", actor, {"data": self._as_log_params(data)}, execute)

    async def get_by_id(self, actor: Actor | None, entity_id: str) -> ServiceResult[ModelT]:
        """Get a live record by ID, subject to the view policy."""

        async def execute(actor: Actor) -> ModelT:
            entity = await self._get_active(entity_id)
            self.policy.can_view(actor, entity)
            return entity

        return await self._run("getById", actor, {"id": entity_id}, execute)

    async def get_by_field(
        self,
        actor: Actor | None,
        field: str,
        value: Any,
    ) -> ServiceResult[ModelT]:
        """Get the first live record whose ``field`` equals ``value``."""

        async def execute(actor: Actor) -> ModelT:
            entity = await self.repository.find_one({field: value})
            if entity is None or is_deleted(entity):
                raise ServiceError(ServiceErrorCode.NOT_FOUND, f"{self.label} not found")
            self.policy.can_view(actor, entity)
            return entity

        return await self._run("getByField", actor, {"field": field, "value": value}, execute)

    async def get_by_slug(self, actor: Actor | None, slug: str) -> ServiceResult[ModelT]:
        return await self.get_by_field(actor, "slug", slug)

    async def get_by_name(self, actor: Actor | None, name: str) -> ServiceResult[ModelT]:
        return await self.get_by_field(actor, "name", name)

    async def update(
        self,
        actor: Actor | None,
        entity_id: str,
        data: Any,
    ) -> ServiceResult[ModelT]:
        """Apply a partial update to a live record.

        Args:
            actor: The calling actor.
            entity_id: The record ID.
            data: Fields to change (dict or pydantic model).

        Returns:
            ServiceResult with the updated record.
        """

        async def execute(actor: Actor) -> ModelT:
            entity = await self._get_active(entity_id)
            values = self._validate_update(data)
            self.policy.can_update(actor, entity)
            values = normalize_values(values)
            if self.hooks.normalize_update is not None:
                values = await self.hooks.normalize_update(values, actor)
            if self.hooks.before_update is not None:
                values = await self.hooks.before_update(entity, values, actor)
            values["updated_by_id"] = actor.id
            updated = await self.repository.update(entity_id, values)
            if updated is None:
                raise ServiceError(ServiceErrorCode.NOT_FOUND, f"{self.label} not found")
            if self.hooks.after_update is not None:
                await self.hooks.after_update(updated, actor)
            return updated

        params = {"id": entity_id, "data": self._as_log_params(data)}
        return await self._run("update", actor, params, execute)

    async def update_visibility(
        self,
        actor: Actor | None,
        entity_id: str,
        visibility: Visibility | str,
    ) -> ServiceResult[ModelT]:
        """Change the visibility of a live record."""

        async def execute(actor: Actor) -> ModelT:
            try:
                new_visibility = Visibility(visibility)
            except ValueError:
                raise ServiceError(
                    ServiceErrorCode.VALIDATION_ERROR,
                    f"Invalid visibility: {visibility!r}",
                ) from None
            entity = await self._get_active(entity_id)
            self.policy.can_update_visibility(actor, entity, new_visibility)
            updated = await self.repository.update(
                entity_id,
                {"visibility": new_visibility.value, "updated_by_id": actor.id},
            )
            if updated is None:
                raise ServiceError(ServiceErrorCode.NOT_FOUND, f"{self.label} not found")
            if self.hooks.after_update is not None:
                await self.hooks.after_update(updated, actor)
            return updated

        params = {"id": entity_id, "visibility": str(visibility)}
        return await self._run("updateVisibility", actor, params, execute)

    async def soft_delete(self, actor: Actor | None, entity_id: str) -> ServiceResult[CountResult]:
        """Soft-delete a record.

        Deleting a record that is already deleted succeeds with a count of 0,
        once the actor has passed the delete check.
        """

        async def execute(actor: Actor) -> CountResult:
            entity = await self._get_any(entity_id)
            self.policy.can_soft_delete(actor, entity)
            if is_deleted(entity):
                return CountResult(count=0)
            count = await self.repository.soft_delete(entity_id, actor.id)
            if count and self.hooks.after_soft_delete is not None:
                await self.hooks.after_soft_delete(entity, actor)
            return CountResult(count=count)

        return await self._run("softDelete", actor, {"id": entity_id}, execute)

    async def restore(self, actor: Actor | None, entity_id: str) -> ServiceResult[CountResult]:
        """Restore a soft-deleted record.

        Restoring a record that is not deleted succeeds with a count of 0,
        once the actor has passed the restore check.
        """

        async def execute(actor: Actor) -> CountResult:
            entity = await self._get_any(entity_id)
            self.policy.can_restore(actor, entity)
            if not is_deleted(entity):
                return CountResult(count=0)
            count = await self.repository.restore(entity_id, actor.id)
            if count and self.hooks.after_restore is not None:
                await self.hooks.after_restore(entity, actor)
            return CountResult(count=count)

        return await self._run("restore", actor, {"id": entity_id}, execute)

    async def hard_delete(self, actor: Actor | None, entity_id: str) -> ServiceResult[CountResult]:
        """Permanently delete a record. There is no way back."""

        async def execute(actor: Actor) -> CountResult:
            entity = await self._get_any(entity_id)
            self.policy.can_hard_delete(actor, entity)
            count = await self.repository.hard_delete(entity_id)
            if count and self.hooks.after_hard_delete is not None:
                await self.hooks.after_hard_delete(entity, actor)
            return CountResult(count=count)

        return await self._run("hardDelete", actor, {"id": entity_id}, execute)

    async def list(
        self,
        actor: Actor | None,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[ModelT]]:
        """List live records visible to the actor.

        ``total`` is the repository total before visibility filtering.
        """

        async def execute(actor: Actor) -> PaginatedResult[ModelT]:
            self.policy.can_list(actor)
            page = pagination or PaginationParams(page_size=self.ctx.settings.default_page_size)
            filters = await self.build_search_filters({}, actor)
            return await self._paginate(actor, filters, page)

        params = {"page": pagination.page, "page_size": pagination.page_size} if pagination else {}
        return await self._run("list", actor, params, execute)

    async def search(
        self,
        actor: Actor | None,
        params: Any = None,
    ) -> ServiceResult[PaginatedResult[ModelT]]:
        """Search live records visible to the actor.

        Args:
            actor: The calling actor.
            params: Search params, including ``page`` and ``page_size``.

        Returns:
            ServiceResult with one page of records.
        """

        async def execute(actor: Actor) -> PaginatedResult[ModelT]:
            self.policy.can_search(actor)
            values, page = self._validate_search(params)
            filters = await self.build_search_filters(values, actor)
            return await self._paginate(actor, filters, page)

        return await self._run("search", actor, self._as_log_params(params), execute)

    async def count(self, actor: Actor | None, params: Any = None) -> ServiceResult[CountResult]:
        """Count live records matching the search params."""

        async def execute(actor: Actor) -> CountResult:
            self.policy.can_count(actor)
            values, _ = self._validate_search(params)
            filters = await self.build_search_filters(values, actor)
            return CountResult(count=await self.repository.count(filters))

        return await self._run("count", actor, self._as_log_params(params), execute)

    @staticmethod
    def _as_log_params(data: Any) -> dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True, mode="json")
        if isinstance(data, dict):
            return data
        return {}
