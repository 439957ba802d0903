"""SQLAlchemy models for Hospeda tables.

All models inherit from the Base class defined in database.py.
"""

from hospeda.infrastructure.persistence.models.accommodation import AccommodationModel
from hospeda.infrastructure.persistence.models.destination import DestinationModel
from hospeda.infrastructure.persistence.models.event import EventModel
from hospeda.infrastructure.persistence.models.payment import PaymentModel
from hospeda.infrastructure.persistence.models.post import PostModel
from hospeda.infrastructure.persistence.models.promotion import PromotionModel
from hospeda.infrastructure.persistence.models.review import (
    AccommodationReviewModel,
    DestinationReviewModel,
)
from hospeda.infrastructure.persistence.models.role_permission import RolePermissionModel
from hospeda.infrastructure.persistence.models.tag import TagModel
from hospeda.infrastructure.persistence.models.user import UserModel

__all__ = [
    "AccommodationModel",
    "AccommodationReviewModel",
    "DestinationModel",
    "DestinationReviewModel",
    "EventModel",
    "PaymentModel",
    "PostModel",
    "PromotionModel",
    "RolePermissionModel",
    "TagModel",
    "UserModel",
]
