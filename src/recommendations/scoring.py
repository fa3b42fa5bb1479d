"""Recommendation scoring modes.

Every mode starts from a base of 10 and is clamped to [0, 100]:

  General       distance tier + 5 per tag + quality
  Cold-start    steeper distance tier, or 20 + 8 per tag without a location
  Personalized  20 per preference-matching tag + distance tier + quality

Quality blends the average of the mean health and hygiene scores (scaled to
0–40) with a popularity term that grows with review volume but is damped by
low ratings, so many poor reviews cannot outrank a few good ones.
"""

import math
from enum import Enum

BASE_SCORE = 10.0
MAX_SCORE = 100.0

# (upper bound in km, points); the last tier applies to everything further away
GENERAL_TIERS = ((0.5, 30.0), (1.0, 25.0), (2.0, 20.0), (5.0, 15.0), (math.inf, 10.0))
COLD_START_TIERS = ((0.5, 40.0), (1.0, 35.0), (2.0, 30.0), (5.0, 20.0), (math.inf, 10.0))

TAG_POINTS = 5.0
COLD_START_BASE_WITHOUT_LOCATION = 20.0
COLD_START_TAG_POINTS = 8.0
PREFERENCE_MATCH_POINTS = 20.0

QUALITY_WEIGHT = 40.0
POPULARITY_CAP = 10.0
POPULARITY_SLOPE = 4.0


class ScoringMode(Enum):
    GENERAL = "GENERAL"
    COLD_START = "COLD_START"
    PERSONALIZED = "PERSONALIZED"


def clamp(score: float) -> float:
    return max(0.0, min(MAX_SCORE, score))


def distance_points(distance_km, tiers=GENERAL_TIERS) -> float:
    if distance_km is None:
        return 0.0
    for upper, points in tiers:
        if distance_km < upper:
            return points
    return tiers[-1][1]


def average_rating(ratings) -> float:
    """Mean of the available health and hygiene averages on a 0–5 scale."""
    if ratings is None:
        return 0.0
    parts = [v for v in (ratings.average_health, ratings.average_hygiene) if v is not None]
    return sum(parts) / len(parts) if parts else 0.0


def quality_points(ratings) -> float:
    avg = average_rating(ratings)
    quality = avg / 5.0 * QUALITY_WEIGHT

    popularity = 0.0
    count = ratings.review_count if ratings is not None else 0
    if count and count > 0:
        popularity = min(POPULARITY_CAP, math.log(count + 1) * POPULARITY_SLOPE) * (avg / 5.0)

    return quality + popularity


def preference_matches(tags, preferences) -> int:
    """Number of tags containing at least one preference, case-insensitively."""
    prefs = [p.lower() for p in preferences]
    return sum(1 for tag in tags if any(p in tag.lower() for p in prefs))


def general_score(eatery, distance_km, ratings) -> float:
    score = BASE_SCORE
    score += distance_points(distance_km, GENERAL_TIERS)
    score += len(eatery.tags) * TAG_POINTS
    score += quality_points(ratings)
    return clamp(score)


def cold_start_score(eatery, distance_km) -> float:
    score = BASE_SCORE
    if distance_km is not None:
        score += distance_points(distance_km, COLD_START_TIERS)
    else:
        score += COLD_START_BASE_WITHOUT_LOCATION + len(eatery.tags) * COLD_START_TAG_POINTS
    return clamp(score)


def personalized_score(eatery, distance_km, ratings, preferences) -> float:
    score = BASE_SCORE
    score += preference_matches(eatery.tags, preferences) * PREFERENCE_MATCH_POINTS
    score += distance_points(distance_km, GENERAL_TIERS)
    score += quality_points(ratings)
    return clamp(score)


def select_mode(authenticated: bool, preferences) -> ScoringMode:
    if not authenticated:
        return ScoringMode.GENERAL
    if not preferences:
        return ScoringMode.COLD_START
    return ScoringMode.PERSONALIZED


def score_eatery(mode, eatery, distance_km, ratings, preferences=()) -> float:
    if mode == ScoringMode.COLD_START:
        return cold_start_score(eatery, distance_km)
    if mode == ScoringMode.PERSONALIZED:
        return personalized_score(eatery, distance_km, ratings, preferences)
    return general_score(eatery, distance_km, ratings)
