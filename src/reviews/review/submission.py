"""SubmitReview — create a first-time review or edit the active one.

At most one active review exists per (eatery, author). Resubmitting while it
is active overwrites it in place with no points change and no limits.
First-time submissions are subject to a global daily cap and a per-eatery
cooldown that also counts soft-deleted reviews, then earn points.

Callers go through ``process_serialized`` with ``author_key`` so the checks
and the insert run as one unit per author.
"""

from datetime import UTC, datetime, timedelta

import structlog
from catalogue import require_eatery
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, List, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.exceptions import CooldownError, RateLimitError
from reviews.points.ledger import credit_points
from reviews.review.review import MAX_PHOTOS, MAX_SCORE, MIN_SCORE, Review
from reviews.utils.query import as_utc, fetch_all

logger = structlog.get_logger(__name__)

DAILY_REVIEW_LIMIT = 5
COOLDOWN = timedelta(days=7)


@reviews.command(part_of="Review")
class SubmitReview:
    eatery_id = Identifier(required=True)
    author_id = Identifier(required=True)
    health_score = Integer(required=True)
    hygiene_score = Integer(required=True)
    text_feedback = Text()
    photos = List(content_type=String, default=None)  # None keeps existing photos


def validate_scores(**scores):
    errors = {}
    for name, value in scores.items():
        if value is not None and (value < MIN_SCORE or value > MAX_SCORE):
            errors[name] = [f"Scores must be between {MIN_SCORE} and {MAX_SCORE}"]
    if errors:
        raise ValidationError(errors)


def validate_photos(photos):
    if photos and len(photos) > MAX_PHOTOS:
        raise ValidationError({"photos": [f"Maximum {MAX_PHOTOS} photos allowed"]})


def start_of_day(now):
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


@reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        validate_scores(health_score=command.health_score, hygiene_score=command.hygiene_score)
        validate_photos(command.photos)

        eatery = require_eatery(command.eatery_id)
        repo = current_domain.repository_for(Review)

        pair_reviews = fetch_all(
            Review,
            eatery_id=str(eatery.id),
            author_id=str(command.author_id),
        )

        active = next((r for r in pair_reviews if not r.is_deleted), None)
        if active is not None:
            changes = {
                "health_score": command.health_score,
                "hygiene_score": command.hygiene_score,
                "text_feedback": command.text_feedback,
            }
            if command.photos is not None:
                changes["photos"] = command.photos
            active.revise(**changes)
            repo.add(active)
            return str(active.id)

        now = datetime.now(UTC)
        self._enforce_daily_limit(command.author_id, now)
        self._enforce_cooldown(pair_reviews, command, now)

        review = Review.submit(
            eatery_id=str(eatery.id),
            author_id=command.author_id,
            health_score=command.health_score,
            hygiene_score=command.hygiene_score,
            text_feedback=command.text_feedback,
            photos=command.photos,
        )
        credit_points(
            command.author_id,
            review.points_awarded,
            reason=f"Review of eatery {eatery.id}",
        )
        repo.add(review)

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            eatery_id=str(eatery.id),
            author_id=str(command.author_id),
            points_awarded=review.points_awarded,
        )
        return str(review.id)

    def _enforce_daily_limit(self, author_id, now):
        since = start_of_day(now)
        created_today = [
            r for r in fetch_all(Review, author_id=str(author_id)) if r.created_at and as_utc(r.created_at) >= since
        ]
        if len(created_today) >= DAILY_REVIEW_LIMIT:
            logger.info("Daily review limit reached", author_id=str(author_id), count=len(created_today))
            raise RateLimitError(
                f"Daily review limit reached. You can only submit {DAILY_REVIEW_LIMIT} reviews per day."
            )

    def _enforce_cooldown(self, pair_reviews, command, now):
        window_start = now - COOLDOWN
        recent = [
            r for r in pair_reviews if r.last_submission_date and as_utc(r.last_submission_date) >= window_start
        ]
        if recent:
            logger.info(
                "Review cooldown in effect",
                author_id=str(command.author_id),
                eatery_id=str(command.eatery_id),
            )
            raise CooldownError(
                f"You must wait {COOLDOWN.days} days before submitting a new review for this eatery"
            )
