"""Domain entities for Hospeda.

Entities are plain Python dataclasses and enums that represent core
business concepts. They have no dependencies on infrastructure.
"""

from hospeda.domain.entities.actor import Actor, guest_actor
from hospeda.domain.entities.enums import (
    AccommodationType,
    EventCategory,
    PaymentStatus,
    PaymentType,
    PostCategory,
)
from hospeda.domain.entities.pagination import PaginatedResult, PaginationParams
from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role
from hospeda.domain.entities.service_result import (
    CountResult,
    ServiceError,
    ServiceErrorCode,
    ServiceErrorDetail,
    ServiceResult,
)
from hospeda.domain.entities.visibility import LifecycleState, Visibility

__all__ = [
    "AccommodationType",
    "Actor",
    "CountResult",
    "EventCategory",
    "LifecycleState",
    "PaginatedResult",
    "PaginationParams",
    "PaymentStatus",
    "PaymentType",
    "Permission",
    "PostCategory",
    "Role",
    "ServiceError",
    "ServiceErrorCode",
    "ServiceErrorDetail",
    "ServiceResult",
    "Visibility",
    "guest_actor",
]
