"""Pydantic schemas for accommodation and destination review endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hospeda.domain.entities.rating import MAX_SCORE, MIN_SCORE
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class AccommodationRating(BaseModel):
    """Scores for every accommodation rating dimension."""

    model_config = ConfigDict(extra="forbid")

    cleanliness: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    hospitality: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    services: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    accuracy: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    communication: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    location: int = Field(ge=MIN_SCORE, le=MAX_SCORE)


class DestinationRating(BaseModel):
    """Scores for destination rating dimensions. Unscored dimensions count as 0."""

    model_config = ConfigDict(extra="forbid")

    landscape: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    attractions: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    accessibility: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    safety: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    cleanliness: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    hospitality: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    cultural_offer: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    gastronomy: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    affordability: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    nightlife: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    infrastructure: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    environmental_care: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    wifi_availability: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    shopping: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    beaches: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    green_spaces: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    local_events: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    weather_satisfaction: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)


class AccommodationReviewCreate(InputSchema):
    """Request body for reviewing an accommodation."""

    accommodation_id: str
    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, max_length=2000)
    rating: AccommodationRating


class AccommodationReviewUpdate(InputSchema):
    """Request body for editing an accommodation review."""

    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, max_length=2000)
    rating: AccommodationRating | None = None


class AccommodationReviewSearch(SearchSchema):
    """Search params for accommodation reviews."""

    accommodation_id: str | None = None
    user_id: str | None = None


class DestinationReviewCreate(InputSchema):
    """Request body for reviewing a destination."""

    destination_id: str
    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, max_length=2000)
    rating: DestinationRating


class DestinationReviewUpdate(InputSchema):
    """Request body for editing a destination review."""

    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, max_length=2000)
    rating: DestinationRating | None = None


class DestinationReviewSearch(SearchSchema):
    """Search params for destination reviews."""

    destination_id: str | None = None
    user_id: str | None = None


class ReviewResponse(AuditResponse):
    """Review as returned by the API."""

    user_id: str
    title: str | None = None
    content: str | None = None
    rating: dict[str, Any] = Field(default_factory=dict)


class AccommodationReviewResponse(ReviewResponse):
    accommodation_id: str


class DestinationReviewResponse(ReviewResponse):
    destination_id: str
