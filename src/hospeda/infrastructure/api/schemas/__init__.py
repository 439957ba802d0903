"""Pydantic schemas for request/response validation."""

from hospeda.infrastructure.api.schemas.accommodation_schemas import (
    AccommodationCreate,
    AccommodationResponse,
    AccommodationSearch,
    AccommodationUpdate,
)
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
    VisibilityUpdateRequest,
)
from hospeda.infrastructure.api.schemas.destination_schemas import (
    DestinationCreate,
    DestinationResponse,
    DestinationSearch,
    DestinationUpdate,
)
from hospeda.infrastructure.api.schemas.event_schemas import (
    EventCreate,
    EventResponse,
    EventSearch,
    EventUpdate,
)
from hospeda.infrastructure.api.schemas.payment_schemas import (
    PaymentCreate,
    PaymentResponse,
    PaymentSearch,
    PaymentUpdate,
    WebhookPayload,
    WebhookResponse,
)
from hospeda.infrastructure.api.schemas.post_schemas import (
    PostCreate,
    PostResponse,
    PostSearch,
    PostUpdate,
)
from hospeda.infrastructure.api.schemas.promotion_schemas import (
    PromotionActiveResponse,
    PromotionApplicationResponse,
    PromotionCreate,
    PromotionResponse,
    PromotionSearch,
    PromotionUpdate,
    PurchaseRequest,
)
from hospeda.infrastructure.api.schemas.review_schemas import (
    AccommodationRating,
    AccommodationReviewCreate,
    AccommodationReviewResponse,
    AccommodationReviewSearch,
    AccommodationReviewUpdate,
    DestinationRating,
    DestinationReviewCreate,
    DestinationReviewResponse,
    DestinationReviewSearch,
    DestinationReviewUpdate,
)
from hospeda.infrastructure.api.schemas.tag_schemas import (
    TagCreate,
    TagResponse,
    TagSearch,
    TagUpdate,
)
from hospeda.infrastructure.api.schemas.user_schemas import (
    UserCreate,
    UserResponse,
    UserSearch,
    UserUpdate,
)

__all__ = [
    "AccommodationCreate",
    "AccommodationRating",
    "AccommodationResponse",
    "AccommodationReviewCreate",
    "AccommodationReviewResponse",
    "AccommodationReviewSearch",
    "AccommodationReviewUpdate",
    "AccommodationSearch",
    "AccommodationUpdate",
    "AuditResponse",
    "DestinationCreate",
    "DestinationRating",
    "DestinationResponse",
    "DestinationReviewCreate",
    "DestinationReviewResponse",
    "DestinationReviewSearch",
    "DestinationReviewUpdate",
    "DestinationSearch",
    "DestinationUpdate",
    "EventCreate",
    "EventResponse",
    "EventSearch",
    "EventUpdate",
    "InputSchema",
    "PaymentCreate",
    "PaymentResponse",
    "PaymentSearch",
    "PaymentUpdate",
    "PostCreate",
    "PostResponse",
    "PostSearch",
    "PostUpdate",
    "PromotionActiveResponse",
    "PromotionApplicationResponse",
    "PromotionCreate",
    "PromotionResponse",
    "PromotionSearch",
    "PromotionUpdate",
    "PurchaseRequest",
    "SearchSchema",
    "TagCreate",
    "TagResponse",
    "TagSearch",
    "TagUpdate",
    "UserCreate",
    "UserResponse",
    "UserSearch",
    "UserUpdate",
    "VisibilityUpdateRequest",
    "WebhookPayload",
    "WebhookResponse",
]
