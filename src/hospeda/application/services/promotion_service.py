"""Promotion service.

Promotions are managed by admins or holders of the matching ``promotion.*``
capability. Hard delete needs SUPER_ADMIN plus ``promotion.hardDelete``.
"""

from datetime import timezone
from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode, ServiceResult
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import has_permission, is_deleted
from hospeda.domain.services.entity_policy import CrudHooks, CrudPolicy, require_authenticated
from hospeda.domain.services.permission_resolver import (
    EntityPermissionReason,
    ensure_allowed,
    resolve_hard_delete,
)
from hospeda.domain.services.promotion_rules import (
    PromotionApplication,
    Purchase,
    apply_promotion,
    is_promotion_active,
)
from hospeda.infrastructure.api.schemas.promotion_schemas import (
    PromotionCreate,
    PromotionSearch,
    PromotionUpdate,
)
from hospeda.infrastructure.persistence.models import PromotionModel


def _admin_or(actor: Actor, permission: Permission, message: str, entity: Any = None) -> None:
    if entity is not None and is_deleted(entity):
        raise ServiceError(
            ServiceErrorCode.FORBIDDEN,
            message,
            {"reason": EntityPermissionReason.DELETED.value},
        )
    if actor.is_active and (actor.role.is_admin or has_permission(actor, permission)):
        return
    raise ServiceError(
        ServiceErrorCode.FORBIDDEN,
        message,
        {"reason": EntityPermissionReason.MISSING_PERMISSION.value},
    )


def promotion_policy() -> CrudPolicy:
    """Build the promotion policy."""

    def can_create(actor: Actor, data: dict[str, Any]) -> None:
        _admin_or(actor, Permission.PROMOTION_CREATE, "Permission denied to create promotion")

    def can_view(actor: Actor, entity: Any) -> None:
        _admin_or(actor, Permission.PROMOTION_VIEW, "Permission denied to view promotion", entity)

    def can_update(actor: Actor, entity: Any) -> None:
        _admin_or(actor, Permission.PROMOTION_UPDATE, "Permission denied to update promotion", entity)

    def can_soft_delete(actor: Actor, entity: Any) -> None:
        _admin_or(actor, Permission.PROMOTION_DELETE, "Permission denied to delete promotion")

    def can_restore(actor: Actor, entity: Any) -> None:
        _admin_or(actor, Permission.PROMOTION_RESTORE, "Permission denied to restore promotion")

    def can_hard_delete(actor: Actor, entity: Any) -> None:
        ensure_allowed(
            resolve_hard_delete(actor, entity, Permission.PROMOTION_HARD_DELETE),
            "Permission denied to permanently delete promotion",
        )

    def can_update_visibility(actor: Actor, entity: Any, visibility: Visibility) -> None:
        can_update(actor, entity)

    def can_list(actor: Actor) -> None:
        _admin_or(actor, Permission.PROMOTION_VIEW, "Permission denied to list promotions")

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
        view_all=Permission.PROMOTION_VIEW,
    )


def _check_period(starts_at: Any, ends_at: Any) -> None:
    def utc(value: Any) -> Any:
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if starts_at is not None and ends_at is not None and utc(ends_at) <= utc(starts_at):
        raise ServiceError(ServiceErrorCode.VALIDATION_ERROR, "ends_at must be after starts_at")


class PromotionService(CrudService[PromotionModel]):
    """CRUD for promotions plus activity checks and application to purchases."""

    def __init__(self, ctx: ServiceContext, repository: Any) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name="promotion",
            create_schema=PromotionCreate,
            update_schema=PromotionUpdate,
            search_schema=PromotionSearch,
            policy=promotion_policy(),
            hooks=CrudHooks(
                before_create=self._before_create,
                before_update=self._before_update,
                build_filters=self._build_filters,
            ),
        )

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        _check_period(data.get("starts_at"), data.get("ends_at"))
        return data

    async def _before_update(
        self,
        entity: PromotionModel,
        data: dict[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        _check_period(data.get("starts_at", entity.starts_at), data.get("ends_at", entity.ends_at))
        return data

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        return {"name__contains": params.get("name"), "is_active": params.get("is_active")}

    async def is_active(self, actor: Actor | None, promotion_id: str) -> ServiceResult[bool]:
        """Tell whether a promotion is live (flag set, within its period, not deleted)."""

        async def execute(actor: Actor) -> bool:
            promotion = await self.repository.find_by_id(promotion_id, include_deleted=True)
            if promotion is None:
                raise ServiceError(ServiceErrorCode.NOT_FOUND, "Promotion not found")
            return is_promotion_active(promotion)

        return await self._run("isActive", actor, {"id": promotion_id}, execute)

    async def apply_promotion(
        self,
        actor: Actor | None,
        promotion_id: str,
        client_id: str,
        purchase: Purchase,
    ) -> ServiceResult[PromotionApplication]:
        """Apply a promotion to a purchase.

        A missing or inactive promotion is not an error: the result reports
        ``applied=False`` with the reason.
        """

        async def execute(actor: Actor) -> PromotionApplication:
            require_authenticated(actor, "Permission denied to apply promotion")
            promotion = await self.repository.find_by_id(promotion_id, include_deleted=True)
            return apply_promotion(promotion, client_id, purchase)

        params = {"id": promotion_id, "client_id": client_id, "amount": purchase.amount}
        return await self._run("applyPromotion", actor, params, execute)
