"""Permission enumeration.

Permissions are dotted capability names of the form ``<entity>.<action>``
with an optional ``.own``/``.any`` scope suffix. ``.any`` lets the holder act
on every record of the entity type, ``.own`` only on records they own.
"""

from enum import Enum


class Permission(str, Enum):
    """Capabilities that can be assigned to roles."""

    # Accommodation
    ACCOMMODATION_CREATE = "accommodation.create"
    ACCOMMODATION_UPDATE_OWN = "accommodation.update.own"
    ACCOMMODATION_UPDATE_ANY = "accommodation.update.any"
    ACCOMMODATION_DELETE_OWN = "accommodation.delete.own"
    ACCOMMODATION_DELETE_ANY = "accommodation.delete.any"
    ACCOMMODATION_RESTORE_OWN = "accommodation.restore.own"
    ACCOMMODATION_RESTORE_ANY = "accommodation.restore.any"
    ACCOMMODATION_HARD_DELETE = "accommodation.hardDelete"
    ACCOMMODATION_PUBLISH = "accommodation.publish"
    ACCOMMODATION_VIEW_ALL = "accommodation.viewAll"
    ACCOMMODATION_VIEW_PRIVATE = "accommodation.view.private"
    ACCOMMODATION_VIEW_DRAFT = "accommodation.view.draft"
    ACCOMMODATION_REVIEW_CREATE = "accommodation.review.create"
    ACCOMMODATION_REVIEW_UPDATE = "accommodation.review.update"
    ACCOMMODATION_REVIEW_MODERATE = "accommodation.review.moderate"

    # Destination
    DESTINATION_CREATE = "destination.create"
    DESTINATION_UPDATE = "destination.update"
    DESTINATION_DELETE = "destination.delete"
    DESTINATION_RESTORE = "destination.restore"
    DESTINATION_HARD_DELETE = "destination.hardDelete"
    DESTINATION_VIEW_ALL = "destination.viewAll"
    DESTINATION_VIEW_PRIVATE = "destination.view.private"
    DESTINATION_VIEW_DRAFT = "destination.view.draft"
    DESTINATION_REVIEW_CREATE = "destination.review.create"
    DESTINATION_REVIEW_UPDATE = "destination.review.update"
    DESTINATION_REVIEW_MODERATE = "destination.review.moderate"

    # Event
    EVENT_CREATE = "event.create"
    EVENT_UPDATE = "event.update"
    EVENT_DELETE = "event.delete"
    EVENT_RESTORE = "event.restore"
    EVENT_HARD_DELETE = "event.hardDelete"
    EVENT_VIEW_ALL = "event.viewAll"
    EVENT_VIEW_PRIVATE = "event.view.private"
    EVENT_VIEW_DRAFT = "event.view.draft"

    # Post
    POST_CREATE = "post.create"
    POST_UPDATE = "post.update"
    POST_DELETE = "post.delete"
    POST_RESTORE = "post.restore"
    POST_HARD_DELETE = "post.hardDelete"
    POST_VIEW_ALL = "post.viewAll"
    POST_VIEW_PRIVATE = "post.view.private"
    POST_VIEW_DRAFT = "post.view.draft"

    # Tag
    TAG_CREATE = "tag.create"
    TAG_UPDATE = "tag.update"
    TAG_DELETE = "tag.delete"

    # Promotion
    PROMOTION_CREATE = "promotion.create"
    PROMOTION_UPDATE = "promotion.update"
    PROMOTION_DELETE = "promotion.delete"
    PROMOTION_RESTORE = "promotion.restore"
    PROMOTION_VIEW = "promotion.view"
    PROMOTION_HARD_DELETE = "promotion.hardDelete"

    # Client / payments
    CLIENT_CREATE = "client.create"
    CLIENT_UPDATE = "client.update"
    CLIENT_DELETE = "client.delete"
    CLIENT_VIEW = "client.view"
    CLIENT_HARD_DELETE = "client.hardDelete"

    # User
    USER_READ_ALL = "user.read.all"
    USER_CREATE = "user.create"
    USER_UPDATE_PROFILE = "user.update.profile"
    USER_UPDATE_ROLES = "user.update.roles"
    USER_DELETE = "user.delete"
    USER_RESTORE = "user.restore"
    USER_HARD_DELETE = "user.hardDelete"
    USER_IMPERSONATE = "user.impersonate"

    # Access
    ACCESS_API_PUBLIC = "access.apiPublic"
    ACCESS_API_ADMIN = "access.apiAdmin"
    ACCESS_PANEL_ADMIN = "access.panelAdmin"

    @classmethod
    def parse(cls, value: "str | Permission") -> "Permission":
        """Parse a permission string.

        Args:
            value: Dotted permission name or an existing member.

        Returns:
            The matching Permission.

        Raises:
            ValueError: If the string is not a known permission.
        """
        if isinstance(value, Permission):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown permission: {value!r}") from None

    @property
    def entity(self) -> str:
        """Entity part of the permission name (``accommodation`` for ``accommodation.create``)."""
        return self.value.split(".", 1)[0]
