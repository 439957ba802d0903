"""Repository implementations for data access."""

from hospeda.infrastructure.persistence.repositories.base_repository import (
    SqlAlchemyRepository,
)
from hospeda.infrastructure.persistence.repositories.payment_repository import (
    PaymentRepository,
)
from hospeda.infrastructure.persistence.repositories.role_permission_repository import (
    RolePermissionRepository,
)

__all__ = [
    "PaymentRepository",
    "RolePermissionRepository",
    "SqlAlchemyRepository",
]
