"""ReviewFlag aggregate — a user's report that a review breaks the rules.

State Machine:
    PENDING → RESOLVED | DISMISSED
    RESOLVED, DISMISSED → (terminal)

One flag per (review, flagger) pair; the check happens in the FlagReview
handler because it needs a repository query.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from reviews.domain import reviews
from reviews.flag.events import FlagDismissed, FlagResolved, ReviewFlagged


class FlagStatus(Enum):
    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"


_VALID_TRANSITIONS = {
    FlagStatus.PENDING: {FlagStatus.RESOLVED, FlagStatus.DISMISSED},
    FlagStatus.RESOLVED: set(),
    FlagStatus.DISMISSED: set(),
}


@reviews.aggregate
class ReviewFlag:
    review_id = Identifier(required=True)
    flagger_id = Identifier(required=True)
    reason = Text(required=True)
    status = String(choices=FlagStatus, default=FlagStatus.PENDING.value)
    resolved_by = Identifier()
    admin_notes = Text()
    created_at = DateTime()
    resolved_at = DateTime()

    @classmethod
    def raise_flag(cls, review_id, flagger_id, reason):
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["Flag reason is required"]})

        now = datetime.now(UTC)
        flag = cls(
            review_id=review_id,
            flagger_id=flagger_id,
            reason=reason,
            status=FlagStatus.PENDING.value,
            created_at=now,
        )
        flag.raise_(
            ReviewFlagged(
                flag_id=str(flag.id),
                review_id=str(review_id),
                flagger_id=str(flagger_id),
                reason=reason,
                flagged_at=now,
            )
        )
        return flag

    @property
    def is_pending(self) -> bool:
        return FlagStatus(self.status) == FlagStatus.PENDING

    def _close(self, target, resolved_by, notes):
        current = FlagStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": ["Flag has already been resolved"]})

        self.status = target.value
        self.resolved_by = resolved_by
        self.admin_notes = notes
        self.resolved_at = datetime.now(UTC)

    def resolve(self, resolved_by, notes=None):
        """Uphold the flag."""
        self._close(FlagStatus.RESOLVED, resolved_by, notes)
        self.raise_(
            FlagResolved(
                flag_id=str(self.id),
                review_id=str(self.review_id),
                resolved_by=str(resolved_by),
                admin_notes=notes,
                resolved_at=self.resolved_at,
            )
        )

    def dismiss(self, resolved_by, notes=None):
        """Close the flag without acting on the review."""
        self._close(FlagStatus.DISMISSED, resolved_by, notes)
        self.raise_(
            FlagDismissed(
                flag_id=str(self.id),
                review_id=str(self.review_id),
                resolved_by=str(resolved_by),
                admin_notes=notes,
                resolved_at=self.resolved_at,
            )
        )
