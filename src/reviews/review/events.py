"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes.
"""

from protean.fields import DateTime, Identifier, Integer, Text

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewSubmitted:
    """An author submitted a first-time review of an eatery."""

    __version__ = 1

    review_id = Identifier(required=True)
    eatery_id = Identifier(required=True)
    author_id = Identifier(required=True)
    health_score = Integer(required=True)
    hygiene_score = Integer(required=True)
    photo_count = Integer(default=0)
    points_awarded = Integer(required=True)
    submitted_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewEdited:
    """An author overwrote the content of their active review."""

    __version__ = 1

    review_id = Identifier(required=True)
    eatery_id = Identifier(required=True)
    health_score = Integer(required=True)
    hygiene_score = Integer(required=True)
    photo_count = Integer(default=0)
    edited_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewDeleted:
    """A review was soft-deleted by its author or a moderator."""

    __version__ = 1

    review_id = Identifier(required=True)
    eatery_id = Identifier(required=True)
    author_id = Identifier(required=True)
    deleted_by = Identifier(required=True)
    reason = Text()
    deleted_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewHidden:
    """A moderator hid a review from aggregates and public listings."""

    __version__ = 1

    review_id = Identifier(required=True)
    eatery_id = Identifier(required=True)
    author_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    reason = Text(required=True)
    hidden_at = DateTime(required=True)
