"""Review aggregate — the core of the Reviews domain.

A Review is one author's health and hygiene rating of one eatery. At most one
review per (eatery, author) pair is active at a time; resubmitting edits it in
place. Soft-deleted reviews are kept for audit and for the per-eatery
submission cooldown, which is tracked through ``last_submission_date``.

Visibility (derived from ``is_hidden`` / ``is_deleted``):
    ACTIVE → HIDDEN   (moderator)
    ACTIVE → DELETED  (author or moderator)
    HIDDEN → DELETED  (moderator)
    DELETED → (terminal)

Points awarded at creation are frozen on the review so that hiding or
deleting it can claw back exactly that amount, once.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Identifier,
    Integer,
    List,
    String,
    Text,
)

from reviews.domain import reviews
from reviews.review.events import (
    ReviewDeleted,
    ReviewEdited,
    ReviewHidden,
    ReviewSubmitted,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MIN_SCORE = 1
MAX_SCORE = 5
MAX_PHOTOS = 3

BASE_POINTS = 10
TEXT_BONUS_POINTS = 5
TEXT_BONUS_MIN_LENGTH = 10
PHOTO_BONUS_POINTS = 5


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReviewVisibility(Enum):
    ACTIVE = "Active"
    HIDDEN = "Hidden"
    DELETED = "Deleted"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    ReviewVisibility.ACTIVE: {ReviewVisibility.HIDDEN, ReviewVisibility.DELETED},
    ReviewVisibility.HIDDEN: {ReviewVisibility.DELETED},
    ReviewVisibility.DELETED: set(),  # Terminal state
}


def points_for_submission(text_feedback=None, photos=None) -> int:
    """Points credited for a first-time review."""
    points = BASE_POINTS
    if text_feedback and len(text_feedback.strip()) >= TEXT_BONUS_MIN_LENGTH:
        points += TEXT_BONUS_POINTS
    if photos:
        points += min(len(photos), MAX_PHOTOS) * PHOTO_BONUS_POINTS
    return points


def _now():
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@reviews.aggregate
class Review:
    """An author's rating of an eatery's healthiness and hygiene."""

    # Core identifiers
    eatery_id = Identifier(required=True)
    author_id = Identifier(required=True)

    # Content
    health_score = Integer(required=True)
    hygiene_score = Integer(required=True)
    text_feedback = Text()
    photos = List(content_type=String)

    # Soft delete
    is_deleted = Boolean(default=False)
    deleted_at = DateTime()
    deleted_by = Identifier()

    # Moderation
    is_hidden = Boolean(default=False)
    hidden_at = DateTime()
    hidden_reason = Text()
    moderated_by = Identifier()

    # Points
    points_awarded = Integer(default=0)
    points_reversed = Boolean(default=False)

    # Timestamps
    last_submission_date = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def scores_must_be_in_range(self):
        for field_name in ("health_score", "hygiene_score"):
            score = getattr(self, field_name)
            if score is not None and (score < MIN_SCORE or score > MAX_SCORE):
                raise ValidationError({field_name: [f"Scores must be between {MIN_SCORE} and {MAX_SCORE}"]})

    @invariant.post
    def photos_cannot_exceed_maximum(self):
        if self.photos and len(self.photos) > MAX_PHOTOS:
            raise ValidationError({"photos": [f"Maximum {MAX_PHOTOS} photos allowed"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        eatery_id,
        author_id,
        health_score,
        hygiene_score,
        text_feedback=None,
        photos=None,
    ):
        """Create a first-time review and fix the points it earns."""
        now = _now()
        photos = list(photos) if photos else []
        points = points_for_submission(text_feedback, photos)

        review = cls(
            eatery_id=eatery_id,
            author_id=author_id,
            health_score=health_score,
            hygiene_score=hygiene_score,
            text_feedback=text_feedback,
            photos=photos,
            is_deleted=False,
            is_hidden=False,
            points_awarded=points,
            points_reversed=False,
            last_submission_date=now,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                eatery_id=str(eatery_id),
                author_id=str(author_id),
                health_score=health_score,
                hygiene_score=hygiene_score,
                photo_count=len(photos),
                points_awarded=points,
                submitted_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------
    @property
    def visibility(self) -> ReviewVisibility:
        if self.is_deleted:
            return ReviewVisibility.DELETED
        if self.is_hidden:
            return ReviewVisibility.HIDDEN
        return ReviewVisibility.ACTIVE

    @property
    def is_visible(self) -> bool:
        """Counted in aggregates and shown in the default listing."""
        return self.visibility == ReviewVisibility.ACTIVE

    def _assert_can_transition(self, target):
        current = self.visibility
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def revise(
        self,
        health_score=_UNSET,
        hygiene_score=_UNSET,
        text_feedback=_UNSET,
        photos=_UNSET,
    ):
        """Overwrite content in place. Points and submission date are untouched."""
        if self.is_deleted:
            raise ValidationError({"review": ["Review has been deleted"]})

        now = _now()

        with atomic_change(self):
            if health_score is not _UNSET:
                self.health_score = health_score
            if hygiene_score is not _UNSET:
                self.hygiene_score = hygiene_score
            if text_feedback is not _UNSET:
                self.text_feedback = text_feedback
            if photos is not _UNSET:
                self.photos = list(photos) if photos else []
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                eatery_id=str(self.eatery_id),
                health_score=self.health_score,
                hygiene_score=self.hygiene_score,
                photo_count=len(self.photos or []),
                edited_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------
    def withdraw(self):
        """Soft-delete on the author's request."""
        if self.is_deleted:
            raise ValidationError({"review": ["Review has already been deleted"]})
        if self.is_hidden:
            raise ValidationError({"review": ["Cannot delete a hidden review. Please contact support."]})

        self._mark_deleted(deleted_by=self.author_id, reason=None)

    def remove(self, moderator_id, reason):
        """Soft-delete by a moderator. Hidden reviews may be removed too."""
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["Reason is required to delete a review"]})
        if self.is_deleted:
            raise ValidationError({"review": ["Review has already been deleted"]})

        self.moderated_by = moderator_id
        self._mark_deleted(deleted_by=moderator_id, reason=reason)

    def _mark_deleted(self, deleted_by, reason):
        self._assert_can_transition(ReviewVisibility.DELETED)

        now = _now()
        with atomic_change(self):
            self.is_deleted = True
            self.deleted_at = now
            self.deleted_by = deleted_by
            self.updated_at = now

        self.raise_(
            ReviewDeleted(
                review_id=str(self.id),
                eatery_id=str(self.eatery_id),
                author_id=str(self.author_id),
                deleted_by=str(deleted_by),
                reason=reason,
                deleted_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def hide(self, moderator_id, reason):
        """Hide from aggregates and public listings; moderation tools still see it."""
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["Reason is required to hide a review"]})
        if self.is_deleted:
            raise ValidationError({"review": ["Cannot hide a deleted review"]})
        if self.is_hidden:
            raise ValidationError({"review": ["Review is already hidden"]})
        self._assert_can_transition(ReviewVisibility.HIDDEN)

        now = _now()
        with atomic_change(self):
            self.is_hidden = True
            self.hidden_at = now
            self.hidden_reason = reason
            self.moderated_by = moderator_id
            self.updated_at = now

        self.raise_(
            ReviewHidden(
                review_id=str(self.id),
                eatery_id=str(self.eatery_id),
                author_id=str(self.author_id),
                moderator_id=str(moderator_id),
                reason=reason,
                hidden_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Points
    # -------------------------------------------------------------------
    def claim_points_reversal(self) -> int:
        """Return the points to claw back, or 0 if already reversed."""
        if self.points_reversed or not self.points_awarded:
            return 0
        self.points_reversed = True
        return self.points_awarded
