"""Review aggregate computation.

Parents of reviews (accommodations, destinations) store a review count, a
per-dimension average rating and an overall average. These are always
recomputed from the full set of live reviews rather than updated
incrementally.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RatingStats:
    """Aggregates derived from a set of reviews.

    Attributes:
        reviews_count: Number of reviews considered.
        rating: Average score per rating dimension.
        average_rating: Mean of the per-dimension averages.
    """

    reviews_count: int
    rating: dict[str, float] = field(default_factory=dict)
    average_rating: float = 0.0


def _score(value: Any) -> float:
    if value is None:
        return 0.0
    return float(value)


def _rating_of(review: Any) -> Mapping[str, Any]:
    if isinstance(review, Mapping):
        return review.get("rating") or {}
    return getattr(review, "rating", None) or {}


def compute_rating_stats(reviews: Iterable[Any], fields: Sequence[str]) -> RatingStats:
    """Average every rating dimension over the given reviews.

    Each dimension is averaged on its own as ``sum / N`` rounded to one
    decimal. A review missing a dimension contributes 0 to that dimension.
    With no reviews every average is exactly 0.

    Args:
        reviews: Reviews exposing a ``rating`` mapping (objects or dicts).
        fields: The rating dimensions to aggregate.

    Returns:
        RatingStats for the reviews.
    """
    totals = {name: 0.0 for name in fields}
    count = 0
    for review in reviews:
        rating = _rating_of(review)
        for name in fields:
            totals[name] += _score(rating.get(name))
        count += 1

    if count == 0:
        return RatingStats(reviews_count=0, rating={name: 0.0 for name in fields}, average_rating=0.0)

    averages = {name: round(total / count, 1) for name, total in totals.items()}
    overall = round(sum(averages.values()) / len(averages), 1) if averages else 0.0
    return RatingStats(reviews_count=count, rating=averages, average_rating=overall)
