"""Role enumeration for authorization.

Roles are coarse-grained; fine-grained decisions are made on permissions.
SUPER_ADMIN is the only role allowed to hard delete records.
"""

from enum import Enum


class Role(str, Enum):
    """Roles an actor can hold."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    HOST = "HOST"
    USER = "USER"
    GUEST = "GUEST"

    @property
    def is_admin(self) -> bool:
        """True for ADMIN and SUPER_ADMIN."""
        return self in (Role.ADMIN, Role.SUPER_ADMIN)
