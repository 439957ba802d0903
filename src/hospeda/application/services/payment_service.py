"""Payment service.

Payments are managed by admins or holders of ``client.update``. Users may
see their own payments; seeing anyone's requires ``client.view``. Status
changes normally arrive through provider webhooks (``handle_webhook``).
"""

from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.enums import PaymentStatus
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode, ServiceResult
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import has_permission, is_deleted, is_owner
from hospeda.domain.services.entity_policy import CrudHooks, CrudPolicy, require_authenticated
from hospeda.domain.services.permission_resolver import (
    EntityPermissionReason,
    ensure_allowed,
    resolve_hard_delete,
)
from hospeda.infrastructure.api.schemas.payment_schemas import (
    PaymentCreate,
    PaymentSearch,
    PaymentUpdate,
)
from hospeda.infrastructure.persistence.models import PaymentModel


def _can_manage(actor: Actor) -> bool:
    return actor.is_active and (actor.role.is_admin or has_permission(actor, Permission.CLIENT_UPDATE))


def _can_view_all(actor: Actor) -> bool:
    return actor.is_active and (actor.role.is_admin or has_permission(actor, Permission.CLIENT_VIEW))


def _deny(message: str, reason: EntityPermissionReason) -> ServiceError:
    return ServiceError(ServiceErrorCode.FORBIDDEN, message, {"reason": reason.value})


def payment_policy() -> CrudPolicy:
    """Build the payment policy."""

    def check(actor: Actor, message: str, entity: Any = None, allow_deleted: bool = False) -> None:
        if entity is not None and is_deleted(entity) and not allow_deleted:
            raise _deny(message, EntityPermissionReason.DELETED)
        if not _can_manage(actor):
            raise _deny(message, EntityPermissionReason.MISSING_PERMISSION)

    def can_create(actor: Actor, data: dict[str, Any]) -> None:
        check(actor, "Permission denied to create payment")

    def can_view(actor: Actor, entity: Any) -> None:
        if is_deleted(entity):
            raise _deny("Permission denied to view payment", EntityPermissionReason.DELETED)
        if _can_view_all(actor) or (actor.is_active and is_owner(actor, entity)):
            return
        raise _deny("Permission denied to view payment", EntityPermissionReason.DENIED)

    def can_update(actor: Actor, entity: Any) -> None:
        check(actor, "Permission denied to update payment", entity)

    def can_soft_delete(actor: Actor, entity: Any) -> None:
        check(actor, "Permission denied to delete payment", entity, allow_deleted=True)

    def can_restore(actor: Actor, entity: Any) -> None:
        check(actor, "Permission denied to restore payment", entity, allow_deleted=True)

    def can_hard_delete(actor: Actor, entity: Any) -> None:
        ensure_allowed(
            resolve_hard_delete(actor, entity, Permission.CLIENT_HARD_DELETE),
            "Permission denied to permanently delete payment",
        )

    def can_update_visibility(actor: Actor, entity: Any, visibility: Visibility) -> None:
        can_update(actor, entity)

    def can_list(actor: Actor) -> None:
        require_authenticated(actor, "Permission denied to list payments")

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
        view_all=Permission.CLIENT_VIEW,
    )


class PaymentService(CrudService[PaymentModel]):
    """CRUD for payments plus webhook-driven status updates."""

    def __init__(self, ctx: ServiceContext, repository: Any) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name="payment",
            create_schema=PaymentCreate,
            update_schema=PaymentUpdate,
            search_schema=PaymentSearch,
            policy=payment_policy(),
            hooks=CrudHooks(
                before_create=self._before_create,
                build_filters=self._build_filters,
            ),
        )

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        data["visibility"] = Visibility.PRIVATE.value
        if data.get("provider_payment_id") and await self.repository.exists(
            {"provider_payment_id": data["provider_payment_id"]}
        ):
            raise ServiceError(
                ServiceErrorCode.ALREADY_EXISTS,
                "A payment with this provider payment ID already exists",
            )
        return data

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        filters = {
            "user_id": params.get("user_id"),
            "status": params.get("status"),
            "type": params.get("type"),
            "provider": params.get("provider"),
            "amount__gte": params.get("min_amount"),
            "amount__lte": params.get("max_amount"),
        }
        if not _can_view_all(actor):
            filters["user_id"] = actor.id
        return filters

    async def handle_webhook(
        self,
        actor: Actor | None,
        provider_payment_id: str,
        new_status: PaymentStatus | str,
        webhook_data: dict[str, Any] | None = None,
    ) -> ServiceResult[PaymentModel]:
        """Apply a provider status notification to the stored payment.

        Args:
            actor: Actor processing the webhook (needs payment management rights).
            provider_payment_id: Payment ID assigned by the provider.
            new_status: Status reported by the provider.
            webhook_data: Raw provider payload, stored on the payment.

        Returns:
            ServiceResult with the updated payment; NOT_FOUND for an unknown
            provider payment ID.
        """

        async def execute(actor: Actor) -> PaymentModel:
            if not _can_manage(actor):
                raise _deny("Permission denied to update payment", EntityPermissionReason.MISSING_PERMISSION)
            try:
                status = PaymentStatus(new_status)
            except ValueError:
                raise ServiceError(
                    ServiceErrorCode.VALIDATION_ERROR,
                    f"Unknown payment status: {new_status!r}",
                ) from None
            payment = await self.repository.find_by_provider_payment_id(provider_payment_id)
            if payment is None or is_deleted(payment):
                raise ServiceError(ServiceErrorCode.NOT_FOUND, "Payment not found")
            previous_status = payment.status
            updated = await self.repository.update_status(
                payment.id,
                status.value,
                provider_data=webhook_data,
                actor_id=actor.id,
            )
            self.logger.logger.info(
                "Payment status updated from webhook",
                payment_id=payment.id,
                provider_payment_id=provider_payment_id,
                previous_status=previous_status,
                status=status.value,
            )
            return updated

        params = {"provider_payment_id": provider_payment_id, "status": str(new_status)}
        return await self._run("handleWebhook", actor, params, execute)
