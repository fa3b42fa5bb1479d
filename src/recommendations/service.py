"""Gather what the scorer needs from the catalogue, reviews and identity.

Must run inside the reviews domain context because rating aggregates are
read from the review repository.
"""

import structlog
from catalogue import get_catalogue

from identity.preferences import get_preference_directory
from recommendations.recommender import recommend, recommend_by_postal_code, recommend_by_tags
from reviews.review.queries import aggregated_ratings_for

logger = structlog.get_logger(__name__)


def _location(latitude, longitude):
    if latitude is None or longitude is None:
        return None
    return (latitude, longitude)


def _inputs():
    eateries = get_catalogue().list_eateries()
    ratings = aggregated_ratings_for([e.id for e in eateries], rounded=False)
    return eateries, ratings


def recommendations_for(principal=None, latitude=None, longitude=None):
    eateries, ratings = _inputs()
    preferences = []
    if principal is not None:
        preferences = get_preference_directory().preferences_for(principal.user_id)

    results = recommend(
        eateries,
        ratings,
        location=_location(latitude, longitude),
        preferences=preferences,
        authenticated=principal is not None,
    )
    logger.debug(
        "Recommendations ranked",
        user_id=principal.user_id if principal else None,
        candidates=len(eateries),
        returned=len(results),
    )
    return results


def recommendations_by_tags(tags, latitude=None, longitude=None):
    eateries, ratings = _inputs()
    return recommend_by_tags(eateries, ratings, tags, location=_location(latitude, longitude))


def recommendations_by_postal_code(postal_code, latitude=None, longitude=None):
    eateries, ratings = _inputs()
    return recommend_by_postal_code(eateries, ratings, postal_code, location=_location(latitude, longitude))
