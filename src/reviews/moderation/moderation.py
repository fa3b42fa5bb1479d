"""Moderator actions on reviews and flags.

Hiding and deleting a review are two variants of one action: each applies
its own state change to the review, then shares the same tail. The tail
claws back the review's points, resolves every pending flag on the review
with a standard note, and appends one audit record. All of it runs inside
the handler's Unit of Work, so the review, flags and points account commit
together. The audit write is outside that guarantee: a failed write is
logged and the moderation stands.

Resolving a single flag records the moderator's decision on it and does not
change the review.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

import structlog
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.audit import record_admin_action
from reviews.domain import reviews
from reviews.exceptions import AuthorizationError
from reviews.flag.flag import FlagStatus, ReviewFlag
from reviews.points.ledger import debit_points
from reviews.review.review import Review
from reviews.utils.query import fetch_all

logger = structlog.get_logger(__name__)

MODERATION_ROLES = frozenset({"MODERATOR", "ADMIN"})


class FlagAction(Enum):
    REMOVE = "REMOVE"
    DISMISS = "DISMISS"


class AuditAction(Enum):
    REVIEW_HIDE = "REVIEW_HIDE"
    REVIEW_DELETE = "REVIEW_DELETE"
    FLAG_RESOLVE = "FLAG_RESOLVE"


class AuditTarget(Enum):
    REVIEW = "REVIEW"
    FLAG = "FLAG"


def require_moderator(role):
    if (role or "").upper() not in MODERATION_ROLES:
        raise AuthorizationError("Only moderators can perform this action")


# ---------------------------------------------------------------------------
# Review moderation variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ReviewModeration:
    """One way of taking a review out of circulation."""

    label: str
    audit_action: AuditAction
    apply: Callable[[Review, str, str], None]


HIDE = ReviewModeration(
    label="Hidden",
    audit_action=AuditAction.REVIEW_HIDE,
    apply=lambda review, moderator_id, reason: review.hide(moderator_id, reason),
)

DELETE = ReviewModeration(
    label="Deleted",
    audit_action=AuditAction.REVIEW_DELETE,
    apply=lambda review, moderator_id, reason: review.remove(moderator_id, reason),
)


def moderate_review(moderation: ReviewModeration, review_id, moderator_id, reason):
    """Apply ``moderation`` to a review and run the shared tail."""
    repo = current_domain.repository_for(Review)
    review = repo.get(review_id)

    moderation.apply(review, moderator_id, reason)

    reversal = review.claim_points_reversal()
    if reversal:
        debit_points(
            review.author_id,
            reversal,
            reason=f"Review {review.id} {moderation.label.lower()} by moderator",
        )
    repo.add(review)

    note = f"{moderation.label} by: {moderator_id}; Reason: {reason}"
    resolved = resolve_pending_flags(review.id, moderator_id, note)

    logger.info(
        "Review moderated",
        review_id=str(review.id),
        action=moderation.audit_action.value,
        moderator_id=str(moderator_id),
        points_reversed=reversal,
        flags_resolved=resolved,
    )

    record_admin_action(
        actor=moderator_id,
        action_type=moderation.audit_action.value,
        target_type=AuditTarget.REVIEW.value,
        target_id=review.id,
        eatery_id=review.eatery_id,
        details=f"{moderation.label}. Reason: {reason}",
    )
    return review


def resolve_pending_flags(review_id, moderator_id, note) -> int:
    flag_repo = current_domain.repository_for(ReviewFlag)
    pending = fetch_all(ReviewFlag, review_id=str(review_id), status=FlagStatus.PENDING.value)
    for flag in pending:
        flag.resolve(resolved_by=moderator_id, notes=note)
        flag_repo.add(flag)
    return len(pending)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@reviews.command(part_of="Review")
class HideReview:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    moderator_role = String(required=True, max_length=20)
    reason = Text()


@reviews.command(part_of="Review")
class DeleteReviewByAdmin:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    moderator_role = String(required=True, max_length=20)
    reason = Text()


@reviews.command(part_of="ReviewFlag")
class ResolveFlag:
    flag_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    moderator_role = String(required=True, max_length=20)
    action = String(required=True, choices=FlagAction)
    notes = Text()


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------
@reviews.command_handler(part_of=Review)
class ReviewModerationHandler:
    @handle(HideReview)
    def hide_review(self, command):
        require_moderator(command.moderator_role)
        moderate_review(HIDE, command.review_id, command.moderator_id, command.reason)

    @handle(DeleteReviewByAdmin)
    def delete_review(self, command):
        require_moderator(command.moderator_role)
        moderate_review(DELETE, command.review_id, command.moderator_id, command.reason)


@reviews.command_handler(part_of=ReviewFlag)
class FlagModerationHandler:
    @handle(ResolveFlag)
    def resolve_flag(self, command):
        require_moderator(command.moderator_role)

        repo = current_domain.repository_for(ReviewFlag)
        flag = repo.get(command.flag_id)
        if not flag.is_pending:
            raise ValidationError({"flag_id": ["Flag has already been resolved"]})

        action = FlagAction(command.action)
        notes = command.notes or f"{action.value} by: {command.moderator_id}"

        if action == FlagAction.REMOVE:
            flag.resolve(resolved_by=command.moderator_id, notes=notes)
        else:  # FlagAction.DISMISS
            flag.dismiss(resolved_by=command.moderator_id, notes=notes)
        repo.add(flag)

        review = current_domain.repository_for(Review).get(flag.review_id)
        record_admin_action(
            actor=command.moderator_id,
            action_type=AuditAction.FLAG_RESOLVE.value,
            target_type=AuditTarget.FLAG.value,
            target_id=flag.id,
            eatery_id=review.eatery_id,
            details=f"{action.value}: {notes}",
        )
        return flag.status
