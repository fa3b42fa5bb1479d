"""BDD tests for review moderation."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, when
from reviews.exceptions import AuthorizationError
from reviews.moderation.moderation import DeleteReviewByAdmin, HideReview, ResolveFlag

scenarios("features/review_moderation.feature")


def _hide(review_id, moderator_id, role, reason):
    current_domain.process(
        HideReview(review_id=review_id, moderator_id=moderator_id, moderator_role=role, reason=reason),
        asynchronous=False,
    )


@when(parsers.cfparse('moderator "{moderator_id}" hides the review for "{reason}"'))
def moderator_hides(review_id, moderator_id, reason, error):
    try:
        _hide(review_id, moderator_id, "MODERATOR", reason)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('user "{user_id}" tries to hide the review for "{reason}"'))
def user_tries_to_hide(review_id, user_id, reason, error):
    try:
        _hide(review_id, user_id, "USER", reason)
    except AuthorizationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('moderator "{moderator_id}" deletes the review for "{reason}"'))
def moderator_deletes(review_id, moderator_id, reason):
    current_domain.process(
        DeleteReviewByAdmin(
            review_id=review_id,
            moderator_id=moderator_id,
            moderator_role="ADMIN",
            reason=reason,
        ),
        asynchronous=False,
    )


@when(parsers.cfparse('moderator "{moderator_id}" dismisses the flag'))
def moderator_dismisses(flag_id, moderator_id):
    current_domain.process(
        ResolveFlag(
            flag_id=flag_id,
            moderator_id=moderator_id,
            moderator_role="MODERATOR",
            action="DISMISS",
        ),
        asynchronous=False,
    )
