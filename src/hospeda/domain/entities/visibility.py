"""Visibility and lifecycle classifications shared by all entities."""

from enum import Enum


class Visibility(str, Enum):
    """Read-access classification of a record."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    DRAFT = "DRAFT"


class LifecycleState(str, Enum):
    """Lifecycle classification, independent of soft delete."""

    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"
    INACTIVE = "INACTIVE"
