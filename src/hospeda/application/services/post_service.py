"""Post service.

Posts are editorial content. Listing posts requires an authenticated
actor. Titles are unique within a category, and news posts must carry an
expiry date in the future.
"""

from datetime import datetime, timezone
from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.enums import PostCategory
from hospeda.domain.entities.pagination import PaginatedResult, PaginationParams
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode, ServiceResult
from hospeda.domain.services.entity_policy import (
    CrudHooks,
    EntityPermissions,
    ownership_policy,
)
from hospeda.infrastructure.api.schemas.post_schemas import (
    PostCreate,
    PostSearch,
    PostUpdate,
)
from hospeda.infrastructure.persistence.models import PostModel

POST_PERMISSIONS = EntityPermissions.unscoped(
    "post",
    create=Permission.POST_CREATE,
    update=Permission.POST_UPDATE,
    delete=Permission.POST_DELETE,
    restore=Permission.POST_RESTORE,
    hard_delete=Permission.POST_HARD_DELETE,
    view_all=Permission.POST_VIEW_ALL,
    view_private=Permission.POST_VIEW_PRIVATE,
    view_draft=Permission.POST_VIEW_DRAFT,
)


def check_news_expiry(is_news: bool, expires_at: datetime | None, now: datetime | None = None) -> None:
    """Require a future ``expires_at`` on news posts.

    Raises:
        ServiceError: VALIDATION_ERROR when a news post has no expiry or an
            expiry in the past.
    """
    if not is_news:
        return
    if expires_at is None:
        raise ServiceError(ServiceErrorCode.VALIDATION_ERROR, "News posts require expires_at")
    now = now or datetime.now(timezone.utc)
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at <= now:
        raise ServiceError(
            ServiceErrorCode.VALIDATION_ERROR,
            "expires_at must be in the future for news posts",
        )


class PostService(CrudService[PostModel]):
    """CRUD and queries for posts."""

    def __init__(self, ctx: ServiceContext, repository: Any) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name="post",
            create_schema=PostCreate,
            update_schema=PostUpdate,
            search_schema=PostSearch,
            policy=ownership_policy(POST_PERMISSIONS, list_requires_authentication=True),
            hooks=CrudHooks(
                before_create=self._before_create,
                before_update=self._before_update,
                build_filters=self._build_filters,
            ),
        )

    async def _ensure_unique_title(
        self,
        title: str,
        category: str,
        exclude_id: str | None = None,
    ) -> None:
        filters: dict[str, Any] = {"title": title, "category": category}
        if exclude_id is not None:
            filters["id__ne"] = exclude_id
        if await self.repository.exists(filters, include_deleted=False):
            raise ServiceError(
                ServiceErrorCode.ALREADY_EXISTS,
                "A post with this title already exists in this category",
            )

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        check_news_expiry(data.get("is_news", False), data.get("expires_at"))
        await self._ensure_unique_title(data["title"], data["category"])
        data["author_id"] = actor.id
        data["slug"] = await self.unique_slug(data["category"], data["title"])
        return data

    async def _before_update(
        self,
        entity: PostModel,
        data: dict[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        if "is_news" in data or "expires_at" in data:
            check_news_expiry(
                data.get("is_news", entity.is_news),
                data.get("expires_at", entity.expires_at),
            )
        if data.get("title") or data.get("category"):
            title = data.get("title") or entity.title
            category = data.get("category") or entity.category
            await self._ensure_unique_title(title, category, exclude_id=entity.id)
            data["slug"] = await self.unique_slug(category, title, exclude_id=entity.id)
        return data

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        return {
            "title__contains": params.get("title"),
            "category": params.get("category"),
            "author_id": params.get("author_id"),
            "is_featured": params.get("is_featured"),
            "is_news": params.get("is_news"),
        }

    async def _list_where(
        self,
        action: str,
        actor: Actor | None,
        filters: dict[str, Any],
        pagination: PaginationParams | None,
    ) -> ServiceResult[PaginatedResult[PostModel]]:
        async def execute(actor: Actor) -> PaginatedResult[PostModel]:
            self.policy.can_list(actor)
            return await self._paginate(actor, filters, pagination or PaginationParams())

        return await self._run(action, actor, {"filters": filters}, execute)

    async def get_featured(
        self,
        actor: Actor | None,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[PostModel]]:
        """List featured posts."""
        return await self._list_where("getFeatured", actor, {"is_featured": True}, pagination)

    async def get_by_category(
        self,
        actor: Actor | None,
        category: PostCategory | str,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[PostModel]]:
        """List posts of one category."""
        value = category.value if isinstance(category, PostCategory) else category
        return await self._list_where("getByCategory", actor, {"category": value}, pagination)
