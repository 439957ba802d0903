"""User service.

Users may read and edit their own profile. Reading everyone requires
``user.read.all``; editing someone else's profile additionally requires
``user.update.profile``. Changing a role or enabling/disabling an account
requires ``user.update.roles``.
"""

from typing import Any

from hospeda.application.services.crud_service import CrudService
from hospeda.core.context import ServiceContext
from hospeda.domain.entities.actor import Actor
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode
from hospeda.domain.entities.visibility import Visibility
from hospeda.domain.services.capabilities import has_all_permissions, has_permission, is_deleted
from hospeda.domain.services.entity_policy import CrudHooks, CrudPolicy, require_authenticated
from hospeda.domain.services.permission_resolver import (
    EntityPermissionReason,
    ensure_allowed,
    resolve_hard_delete,
    resolve_permission,
)
from hospeda.infrastructure.api.schemas.user_schemas import UserCreate, UserSearch, UserUpdate
from hospeda.infrastructure.persistence.models import UserModel

PRIVILEGED_FIELDS = ("role", "is_active")


def _is_self(actor: Actor, user: Any) -> bool:
    return actor.id is not None and actor.id == user.id


def _forbidden(message: str, reason: EntityPermissionReason) -> ServiceError:
    return ServiceError(ServiceErrorCode.FORBIDDEN, message, {"reason": reason.value})


def user_policy() -> CrudPolicy:
    """Build the user policy."""

    def can_create(actor: Actor, data: dict[str, Any]) -> None:
        ensure_allowed(resolve_permission(actor, Permission.USER_CREATE), "Permission denied to create user")

    def can_view(actor: Actor, user: Any) -> None:
        message = "Permission denied to view user"
        if is_deleted(user):
            raise _forbidden(message, EntityPermissionReason.DELETED)
        if not actor.is_active:
            raise _forbidden(message, EntityPermissionReason.ACTOR_DISABLED)
        if _is_self(actor, user) or has_permission(actor, Permission.USER_READ_ALL):
            return
        raise _forbidden(message, EntityPermissionReason.MISSING_PERMISSION)

    def can_update(actor: Actor, user: Any) -> None:
        message = "Permission denied to update user"
        if not actor.is_active:
            raise _forbidden(message, EntityPermissionReason.ACTOR_DISABLED)
        if is_deleted(user):
            raise _forbidden(message, EntityPermissionReason.DELETED)
        if _is_self(actor, user):
            return
        if has_all_permissions(actor, Permission.USER_UPDATE_PROFILE, Permission.USER_READ_ALL):
            return
        raise _forbidden(message, EntityPermissionReason.DENIED)

    def can_soft_delete(actor: Actor, user: Any) -> None:
        ensure_allowed(resolve_permission(actor, Permission.USER_DELETE), "Permission denied to delete user")

    def can_restore(actor: Actor, user: Any) -> None:
        ensure_allowed(resolve_permission(actor, Permission.USER_RESTORE), "Permission denied to restore user")

    def can_hard_delete(actor: Actor, user: Any) -> None:
        ensure_allowed(
            resolve_hard_delete(actor, user, Permission.USER_HARD_DELETE),
            "Permission denied to permanently delete user",
        )

    def can_update_visibility(actor: Actor, user: Any, visibility: Visibility) -> None:
        can_update(actor, user)

    def can_list(actor: Actor) -> None:
        require_authenticated(actor, "Permission denied to list users")
        ensure_allowed(resolve_permission(actor, Permission.USER_READ_ALL), "Permission denied to list users")

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
        view_all=Permission.USER_READ_ALL,
    )


class UserService(CrudService[UserModel]):
    """CRUD for users. Email addresses are unique."""

    def __init__(self, ctx: ServiceContext, repository: Any) -> None:
        super().__init__(
            ctx,
            repository,
            entity_name="user",
            create_schema=UserCreate,
            update_schema=UserUpdate,
            search_schema=UserSearch,
            policy=user_policy(),
            hooks=CrudHooks(
                before_create=self._before_create,
                before_update=self._before_update,
                build_filters=self._build_filters,
            ),
        )

    async def _before_create(self, data: dict[str, Any], actor: Actor) -> dict[str, Any]:
        if await self.repository.exists({"email": data["email"]}):
            raise ServiceError(
                ServiceErrorCode.ALREADY_EXISTS,
                f"User with email '{data['email']}' already exists",
            )
        return data

    async def _before_update(
        self,
        entity: UserModel,
        data: dict[str, Any],
        actor: Actor,
    ) -> dict[str, Any]:
        if any(field in data for field in PRIVILEGED_FIELDS) and not has_permission(
            actor, Permission.USER_UPDATE_ROLES
        ):
            raise _forbidden(
                "Permission denied to change user role or status",
                EntityPermissionReason.MISSING_PERMISSION,
            )
        return data

    async def _build_filters(self, params: dict[str, Any], actor: Actor) -> dict[str, Any]:
        email = params.get("email")
        return {
            "email": email.strip().lower() if email else None,
            "display_name__contains": params.get("display_name"),
            "role": params.get("role"),
            "is_active": params.get("is_active"),
        }
