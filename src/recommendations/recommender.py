"""Rank eateries for a user.

Pure functions: callers pass in the eateries, the rating aggregates keyed by
eatery id, and whatever user context is available. Nothing here reads or
writes state.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from recommendations.distance import distance_to
from recommendations.reasons import reason_for
from recommendations.scoring import ScoringMode, score_eatery, select_mode

TOP_N = 5


@dataclass
class Recommendation:
    id: str
    name: str
    address: str | None = None
    postal_code: str | None = None
    tags: list[str] = field(default_factory=list)
    description: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    distance_km: float | None = None
    reason: str = ""
    score: float | None = None
    average_health: float | None = None
    average_hygiene: float | None = None
    review_count: int = 0


def _one_decimal(value):
    if value is None:
        return None
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _build(eatery, location, ratings, mode, preferences):
    """Score one eatery. Returns the raw score, used for ranking, with its presentation."""
    distance_km = distance_to(eatery, location)
    rating = ratings.get(str(eatery.id)) if ratings else None
    score = score_eatery(mode, eatery, distance_km, rating, preferences)
    recommendation = Recommendation(
        id=str(eatery.id),
        name=eatery.name,
        address=eatery.address,
        postal_code=eatery.postal_code,
        tags=list(eatery.tags),
        description=eatery.description,
        latitude=eatery.latitude,
        longitude=eatery.longitude,
        distance_km=distance_km,
        reason=reason_for(eatery, distance_km),
        score=_one_decimal(score),
        average_health=_one_decimal(rating.average_health) if rating else None,
        average_hygiene=_one_decimal(rating.average_hygiene) if rating else None,
        review_count=rating.review_count if rating else 0,
    )
    return score, recommendation


def recommend(eateries, ratings, location=None, preferences=(), authenticated=False, limit=TOP_N):
    """Top ``limit`` eateries, best score first."""
    preferences = [p for p in (preferences or ()) if p and p.strip()]
    mode = select_mode(authenticated, preferences)

    scored = [_build(e, location, ratings, mode, preferences) for e in eateries]
    scored.sort(key=lambda pair: (-pair[0], pair[1].name.lower()))
    return [recommendation for _, recommendation in scored[:limit]]


def _by_proximity(recommendations, location):
    if location is None:
        return sorted(recommendations, key=lambda r: r.name.lower())
    return sorted(
        recommendations,
        key=lambda r: (r.distance_km is None, r.distance_km or 0.0, r.name.lower()),
    )


def recommend_by_tags(eateries, ratings, tags, location=None):
    """Every eatery carrying any of ``tags``, nearest first."""
    wanted = [t for t in (tags or ()) if t and t.strip()]
    matching = [e for e in eateries if any(e.has_tag(t) for t in wanted)]
    built = [_build(e, location, ratings, ScoringMode.GENERAL, ())[1] for e in matching]
    return _by_proximity(built, location)


def recommend_by_postal_code(eateries, ratings, postal_code, location=None):
    """Every eatery at ``postal_code``, nearest first."""
    code = str(postal_code).strip()
    matching = [e for e in eateries if e.postal_code is not None and str(e.postal_code).strip() == code]
    built = [_build(e, location, ratings, ScoringMode.GENERAL, ())[1] for e in matching]
    return _by_proximity(built, location)
