"""Default role to permission assignment.

Seeded into the ``role_permissions`` table on database initialization and
used as the fallback when a role has no stored assignment.
"""

from hospeda.domain.entities.permission import Permission
from hospeda.domain.entities.role import Role

_ALL = frozenset(Permission)

_HARD_DELETES = frozenset(
    {
        Permission.ACCOMMODATION_HARD_DELETE,
        Permission.DESTINATION_HARD_DELETE,
        Permission.EVENT_HARD_DELETE,
        Permission.POST_HARD_DELETE,
        Permission.PROMOTION_HARD_DELETE,
        Permission.CLIENT_HARD_DELETE,
        Permission.USER_HARD_DELETE,
    }
)

_REVIEWS = frozenset(
    {
        Permission.ACCOMMODATION_REVIEW_CREATE,
        Permission.ACCOMMODATION_REVIEW_UPDATE,
        Permission.DESTINATION_REVIEW_CREATE,
        Permission.DESTINATION_REVIEW_UPDATE,
    }
)

DEFAULT_ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.SUPER_ADMIN: _ALL,
    Role.ADMIN: _ALL - _HARD_DELETES - {Permission.USER_IMPERSONATE},
    Role.EDITOR: frozenset(
        {
            Permission.EVENT_CREATE,
            Permission.EVENT_UPDATE,
            Permission.EVENT_DELETE,
            Permission.EVENT_RESTORE,
            Permission.EVENT_VIEW_ALL,
            Permission.POST_CREATE,
            Permission.POST_UPDATE,
            Permission.POST_DELETE,
            Permission.POST_RESTORE,
            Permission.POST_VIEW_ALL,
            Permission.TAG_CREATE,
            Permission.TAG_UPDATE,
            Permission.TAG_DELETE,
            Permission.ACCESS_PANEL_ADMIN,
            Permission.ACCESS_API_PUBLIC,
        }
    ),
    Role.HOST: frozenset(
        {
            Permission.ACCOMMODATION_CREATE,
            Permission.ACCOMMODATION_UPDATE_OWN,
            Permission.ACCOMMODATION_DELETE_OWN,
            Permission.ACCOMMODATION_RESTORE_OWN,
            Permission.ACCOMMODATION_PUBLISH,
            Permission.ACCOMMODATION_VIEW_ALL,
            Permission.USER_UPDATE_PROFILE,
            Permission.ACCESS_API_PUBLIC,
        }
    )
    | _REVIEWS,
    Role.USER: frozenset({Permission.USER_UPDATE_PROFILE, Permission.ACCESS_API_PUBLIC}) | _REVIEWS,
    Role.GUEST: frozenset({Permission.ACCESS_API_PUBLIC}),
}


def default_permissions_for(role: Role) -> frozenset[Permission]:
    """Return the seeded permissions of a role."""
    return DEFAULT_ROLE_PERMISSIONS.get(role, frozenset())
