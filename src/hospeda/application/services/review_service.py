"""Review services.

Reviews belong to the user who wrote them and to a parent record
(accommodation or destination). Every write that changes the set of live
reviews recomputes the parent's ``reviews_count``, per-dimension ``rating``
and ``average_rating`` before the call returns.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.pagination import PaginatedResult, PaginationParams
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.rating import (
    ACCOMMODATION_RATING_FIELDS,
    DESTINATION_RATING_FIELDS,
)
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode, ServiceResult
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import has_permission, is_deleted, is_owner
from hospeda.domain.services.entity_policy import CrudHooks, CrudPolicy, require_authenticated
from hospeda.domain.services.permission_resolver import (
    EntityPermissionReason,
    ensure_allowed,
    resolve_hard_delete,
    resolve_permission,
    resolve_view,
)
from hospeda.domain.services.review_stats import RatingStats, compute_rating_stats
from hospeda.infrastructure.api.schemas.review_schemas import (
    AccommodationReviewCreate,
    AccommodationReviewSearch,
    AccommodationReviewUpdate,
    DestinationReviewCreate,
    DestinationReviewSearch,
    DestinationReviewUpdate,
)


@dataclass(frozen=True)
class ReviewConfig:
    """What distinguishes one kind of review from another.

    Attributes:
        entity_name: Entity name of the review (``accommodation_review``).
        parent_name: Entity name of the parent (``accommodation``).
        parent_field: Foreign key column pointing at the parent.
        rating_fields: Rating dimensions aggregated on the parent.
        create: Capability to write a review.
        update: Capability to edit one's own review.
        moderate: Capability to edit or remove anyone's review.
    """

    entity_name: str
    parent_name: str
    parent_field: str
    rating_fields: tuple[str, ...]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    search_schema: type[BaseModel]
    create: Permission
    update: Permission
    moderate: Permission


ACCOMMODATION_REVIEW = ReviewConfig(
    entity_name="accommodation_review",
    parent_name="accommodation",
    parent_field="accommodation_id",
    rating_fields=ACCOMMODATION_RATING_FIELDS,
    create_schema=AccommodationReviewCreate,
    update_schema=AccommodationReviewUpdate,
    search_schema=AccommodationReviewSearch,
    create=Permission.ACCOMMODATION_REVIEW_CREATE,
    update=Permission.ACCOMMODATION_REVIEW_UPDATE,
    moderate=Permission.ACCOMMODATION_REVIEW_MODERATE,
)

DESTINATION_REVIEW = ReviewConfig(
    entity_name="destination_review",
    parent_name="destination",
    parent_field="destination_id",
    rating_fields=DESTINATION_RATING_FIELDS,
    create_schema=DestinationReviewCreate,
    update_schema=DestinationReviewUpdate,
    search_schema=DestinationReviewSearch,
    create=Permission.DESTINATION_REVIEW_CREATE,
    update=Permission.DESTINATION_REVIEW_UPDATE,
    moderate=Permission.DESTINATION_REVIEW_MODERATE,
)


def review_policy(config: ReviewConfig) -> CrudPolicy:
    """Build the policy shared by all review types.

    Authors and moderators may edit, delete and restore a review. Only a
    SUPER_ADMIN holding the moderate capability may hard delete one.
    """
    name = config.entity_name.replace("_", " ")

    def author_or_moderator(actor: Actor, entity: Any, message: str, allow_deleted: bool) -> None:
        if not actor.is_active:
            reason = EntityPermissionReason.ACTOR_DISABLED
        elif is_deleted(entity) and not allow_deleted:
            reason = EntityPermissionReason.DELETED
        elif has_permission(actor, config.moderate) or is_owner(actor, entity):
            return
        else:
            reason = EntityPermissionReason.DENIED
        raise ServiceError(ServiceErrorCode.FORBIDDEN, message, {"reason": reason.value})

    def can_create(actor: Actor, data: dict[str, Any]) -> None:
        require_authenticated(actor, f"Permission denied to create {name}")
        ensure_allowed(resolve_permission(actor, config.create), f"Permission denied to create {name}")

    def can_view(actor: Actor, entity: Any) -> None:
        if is_deleted(entity):
            raise ServiceError(
                ServiceErrorCode.FORBIDDEN,
                f"Permission denied to view {name}",
                {"reason": EntityPermissionReason.DELETED.value},
            )
        ensure_allowed(resolve_view(actor, entity, config.moderate), f"Permission denied to view {name}")

    def can_update(actor: Actor, entity: Any) -> None:
        author_or_moderator(actor, entity, f"Permission denied to update {name}", False)

    def can_soft_delete(actor: Actor, entity: Any) -> None:
        author_or_moderator(actor, entity, f"Permission denied to delete {name}", True)

    def can_restore(actor: Actor, entity: Any) -> None:
        author_or_moderator(actor, entity, f"Permission denied to restore {name}", True)

    def can_hard_delete(actor: Actor, entity: Any) -> None:
        ensure_allowed(
            resolve_hard_delete(actor, entity, config.moderate),
            f"Permission denied to permanently delete {name}",
        )

    def can_update_visibility(actor: Actor, entity: Any, visibility: Visibility) -> None:
        if is_deleted(entity) or not has_permission(actor, config.moderate):
            raise ServiceError(
                ServiceErrorCode.FORBIDDEN,
                f"Permission denied to change visibility of {name}",
            )

    return CrudPolicy(
        can_create=can_create,
        can_view=can_view,
        can_update=can_update,
        can_soft_delete=can_soft_delete,
        can_restore=can_restore,
        can_hard_delete=can_hard_delete,
        can_update_visibility=can_update_visibility,
        view_all=config.moderate,
    )


class ReviewService(CrudService[Any]):
    """CRUD for one kind of review, keeping the parent's aggregates current.

    Args:
        ctx: Service context.
        repository: Review repository.
        parent_repository: Repository of the reviewed records.
        config: Review kind configuration.
    """

    def __init__(
        self,
        ctx: ServiceContext,
        repository: Any,
        parent_repository: Any,
        config: ReviewConfig,
    ) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name=config.entity_name,
            create_schema=config.create_schema,
            update_schema=config.update_schema,
            search_schema=config.search_schema,
            policy=review_policy(config),
            hooks=CrudHooks(
                before_create=self._before_create,
                after_create=self._after_write,
                after_update=self._after_write,
                after_soft_delete=self._after_write,
                after_restore=self._after_write,
                after_hard_delete=self._after_write,
            ),
        )
        self.parent_repository = parent_repository
        self.config = config

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        parent_id = data[self.config.parent_field]
        parent = await self.parent_repository.find_by_id(parent_id, include_deleted=True)
        if parent is None or is_deleted(parent):
            raise ServiceError(
                ServiceErrorCode.NOT_FOUND,
                f"{self.config.parent_name.capitalize()} not found",
            )
        data["user_id"] = actor.id
        return data

    async def _after_write(self, entity: Any, actor: Actor) -> None:
        await self._recalculate(getattr(entity, self.config.parent_field))

    async def _recalculate(self, parent_id: str) -> RatingStats:
        """Recompute and store the parent's aggregates from its live reviews."""
        reviews, _ = await self.repository.find_all({self.config.parent_field: parent_id})
        stats = compute_rating_stats(reviews, self.config.rating_fields)
        await self.parent_repository.update(
            parent_id,
            {
                "reviews_count": stats.reviews_count,
                "rating": stats.rating,
                "average_rating": stats.average_rating,
            },
        )
        self.logger.logger.info(
            "Review stats recalculated",
            entity=self.config.parent_name,
            parent_id=parent_id,
            reviews_count=stats.reviews_count,
            average_rating=stats.average_rating,
        )
        return stats

    async def list_by_parent(
        self,
        actor: Actor | None,
        parent_id: str,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[Any]]:
        """List the visible reviews of one parent record."""

        async def execute(actor: Actor) -> PaginatedResult[Any]:
            self.policy.can_list(actor)
            page = pagination or PaginationParams()
            return await self._paginate(actor, {self.config.parent_field: parent_id}, page)

        return await self._run("listByParent", actor, {"parent_id": parent_id}, execute)

    async def list_by_user(
        self,
        actor: Actor | None,
        user_id: str,
        pagination: PaginationParams | None = None,
    ) -> ServiceResult[PaginatedResult[Any]]:
        """List the reviews written by one user.

        Only the user themselves and moderators may do this.
        """

        async def execute(actor: Actor) -> PaginatedResult[Any]:
            if actor.id != user_id and not has_permission(actor, self.config.moderate):
                raise ServiceError(ServiceErrorCode.FORBIDDEN, "Permission denied")
            page = pagination or PaginationParams()
            return await self._paginate(actor, {"user_id": user_id}, page)

        return await self._run("listByUser", actor, {"user_id": user_id}, execute)

    async def recalculate_stats(
        self,
        actor: Actor | None,
        parent_id: str,
    ) -> ServiceResult[RatingStats]:
        """Recompute a parent's review aggregates on demand (moderators only)."""

        async def execute(actor: Actor) -> RatingStats:
            if not has_permission(actor, self.config.moderate):
                raise ServiceError(ServiceErrorCode.FORBIDDEN, "Permission denied")
            parent = await self.parent_repository.find_by_id(parent_id, include_deleted=True)
            if parent is None:
                raise ServiceError(
                    ServiceErrorCode.NOT_FOUND,
                    f"{self.config.parent_name.capitalize()} not found",
                )
            return await self._recalculate(parent_id)

        return await self._run("recalculateStats", actor, {"parent_id": parent_id}, execute)


class AccommodationReviewService(ReviewService):
    """Reviews of accommodations."""

    def __init__(self, ctx: ServiceContext, repository: Any, accommodation_repository: Any) -> None:
        super().__init__(ctx, repository, accommodation_repository, ACCOMMODATION_REVIEW)


class DestinationReviewService(ReviewService):
    """Reviews of destinations."""

    def __init__(self, ctx: ServiceContext, repository: Any, destination_repository: Any) -> None:
        super().__init__(ctx, repository, destination_repository, DESTINATION_REVIEW)
