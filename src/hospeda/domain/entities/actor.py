"""Actor value object.

An actor is the caller of a service operation. It is built once per request
by the authentication layer (or synthesized as a guest) and never persisted.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role


@dataclass(frozen=True)
class Actor:
    """The authenticated or guest caller of a service.

    Attributes:
        id: User ID, or None for the guest actor.
        role: The actor's role.
        permissions: Resolved capability set.
        is_active: False when the actor's account is disabled.
    """

    id: str | None
    role: Role
    permissions: frozenset[Permission] = field(default_factory=frozenset)
    is_active: bool = True

    def __post_init__(self) -> None:
        """Coerce role and permission values into their enums."""
        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role(self.role))
        object.__setattr__(
            self, "permissions", frozenset(Permission.parse(p) for p in self.permissions)
        )

    @classmethod
    def build(
        cls,
        id: str | None,
        role: Role | str,
        permissions: Iterable[Permission | str] = (),
        is_active: bool = True,
    ) -> "Actor":
        """Build an actor from loosely typed values."""
        return cls(id=id, role=Role(role), permissions=frozenset(permissions), is_active=is_active)

    @property
    def is_guest(self) -> bool:
        return self.id is None or self.role == Role.GUEST

    @property
    def is_authenticated(self) -> bool:
        return not self.is_guest

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN


def guest_actor() -> Actor:
    """Return the actor used when a request carries no credentials."""
    return Actor(id=None, role=Role.GUEST, permissions=frozenset())
