"""Read-side queries over reviews.

Aggregates and public listings only count visible reviews (neither deleted
nor hidden). Moderation tooling additionally sees hidden ones.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from catalogue import require_eatery

from reviews.review.review import Review
from reviews.utils.query import as_utc, fetch_all


class ReviewSort(Enum):
    RECENT = "RECENT"
    HEALTH = "HEALTH"
    HYGIENE = "HYGIENE"


@dataclass(frozen=True)
class AggregatedRatings:
    average_health: float | None = None
    average_hygiene: float | None = None
    review_count: int = 0


def round_half_up(value, places=1):
    if value is None:
        return None
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _mean(values):
    return sum(values) / len(values) if values else None


def summarize(reviews, rounded=True) -> AggregatedRatings:
    """Average the scores of ``reviews``, which must already be visible ones.

    ``rounded=False`` keeps the raw means, which is what the scorer ranks on.
    """
    reviews = list(reviews)
    if not reviews:
        return AggregatedRatings()

    health = _mean([r.health_score for r in reviews])
    hygiene = _mean([r.hygiene_score for r in reviews])
    if rounded:
        health, hygiene = round_half_up(health), round_half_up(hygiene)
    return AggregatedRatings(average_health=health, average_hygiene=hygiene, review_count=len(reviews))


def _visible(**filters):
    return fetch_all(Review, is_deleted=False, is_hidden=False, **filters)


def aggregated_ratings(eatery_id) -> AggregatedRatings:
    require_eatery(eatery_id)
    return summarize(_visible(eatery_id=str(eatery_id)))


def aggregated_ratings_for(eatery_ids=None, rounded=True) -> dict[str, AggregatedRatings]:
    """Ratings for many eateries from one read. Eateries without reviews are absent."""
    wanted = {str(eid) for eid in eatery_ids} if eatery_ids is not None else None

    grouped: dict[str, list] = {}
    for review in _visible():
        key = str(review.eatery_id)
        if wanted is None or key in wanted:
            grouped.setdefault(key, []).append(review)
    return {key: summarize(items, rounded) for key, items in grouped.items()}


def _newest_first(review):
    created = as_utc(review.created_at)
    return created.timestamp() if created else 0.0


def visible_reviews(eatery_id, sort_by=ReviewSort.RECENT) -> list[Review]:
    require_eatery(eatery_id)
    sort_by = ReviewSort(sort_by.upper() if isinstance(sort_by, str) else sort_by)

    items = _visible(eatery_id=str(eatery_id))
    if sort_by == ReviewSort.HEALTH:
        return sorted(items, key=lambda r: (r.health_score, _newest_first(r)), reverse=True)
    if sort_by == ReviewSort.HYGIENE:
        return sorted(items, key=lambda r: (r.hygiene_score, _newest_first(r)), reverse=True)
    return sorted(items, key=_newest_first, reverse=True)


def user_review(eatery_id, user_id) -> Review | None:
    """The author's active review of an eatery, hidden or not."""
    require_eatery(eatery_id)
    for review in fetch_all(Review, eatery_id=str(eatery_id), author_id=str(user_id)):
        if not review.is_deleted:
            return review
    return None


def moderation_view(eatery_id) -> list[Review]:
    """Every non-deleted review of an eatery, hidden ones included, newest first."""
    items = fetch_all(Review, eatery_id=str(eatery_id), is_deleted=False)
    return sorted(items, key=_newest_first, reverse=True)
