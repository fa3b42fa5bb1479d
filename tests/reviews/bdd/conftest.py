"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from reviews.exceptions import AuthorizationError, CooldownError, RateLimitError
from reviews.flag.flag import ReviewFlag
from reviews.flag.flagging import FlagReview
from reviews.moderation.moderation import HideReview
from reviews.points.queries import points_balance
from reviews.review.removal import DeleteReview
from reviews.review.review import Review
from reviews.review.submission import SubmitReview
from reviews.utils.query import fetch_all

_ERROR_CLASSES = {
    "validation": ValidationError,
    "authorization": AuthorizationError,
    "cooldown": CooldownError,
    "rate limit": RateLimitError,
}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


def _submit(user_id, eatery_id, text=None, photo_count=0):
    return current_domain.process(
        SubmitReview(
            eatery_id=eatery_id,
            author_id=user_id,
            health_score=4,
            hygiene_score=5,
            text_feedback=text,
            photos=[f"photo-{n}.jpg" for n in range(photo_count)],
        ),
        asynchronous=False,
    )


def _hide(review_id, moderator_id, role, reason):
    current_domain.process(
        HideReview(review_id=review_id, moderator_id=moderator_id, moderator_role=role, reason=reason),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('user "{user_id}" has reviewed "{eatery_id}"'), target_fixture="review_id")
def user_has_reviewed(user_id, eatery_id):
    return _submit(user_id, eatery_id)


@given(
    parsers.cfparse('user "{user_id}" has reviewed "{eatery_id}" with text "{text}" and {photo_count:d} photos'),
    target_fixture="review_id",
)
def user_has_reviewed_with_content(user_id, eatery_id, text, photo_count):
    return _submit(user_id, eatery_id, text, photo_count)


@given(parsers.cfparse('user "{user_id}" has reviewed {count:d} eateries today'))
def user_has_reviewed_many(user_id, count):
    for n in range(1, count + 1):
        _submit(user_id, f"eatery-{n}")


@given(parsers.cfparse('user "{user_id}" has deleted the review'))
def user_has_deleted(review_id, user_id):
    current_domain.process(DeleteReview(review_id=review_id, requester_id=user_id), asynchronous=False)


@given(parsers.cfparse('user "{user_id}" has flagged the review as "{reason}"'), target_fixture="flag_id")
def user_has_flagged(review_id, user_id, reason):
    return current_domain.process(
        FlagReview(review_id=review_id, flagger_id=user_id, reason=reason),
        asynchronous=False,
    )


@given(parsers.cfparse('moderator "{moderator_id}" has hidden the review for "{reason}"'))
def moderator_has_hidden(review_id, moderator_id, reason):
    _hide(review_id, moderator_id, "MODERATOR", reason)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the review is {visibility}"))
def review_visibility_is(review_id, visibility):
    review = current_domain.repository_for(Review).get(review_id)
    assert review.visibility.value.lower() == visibility


@then(parsers.cfparse('user "{user_id}" has {points:d} points'))
def user_has_points(user_id, points):
    assert points_balance(user_id).total_points == points


@then(parsers.cfparse('user "{user_id}" has {count:d} active review of "{eatery_id}"'))
def user_has_active_reviews(user_id, count, eatery_id):
    active = fetch_all(Review, eatery_id=eatery_id, author_id=user_id, is_deleted=False)
    assert len(active) == count


@then(parsers.cfparse("the {action} is rejected with a {kind} error"))
@then(parsers.cfparse("the {action} is rejected with an {kind} error"))
def action_rejected(error, action, kind):
    assert error["exc"] is not None, f"Expected the {action} to fail"
    assert isinstance(error["exc"], _ERROR_CLASSES[kind])


@then(parsers.cfparse('every flag on the review is "{status}"'))
def flags_have_status(review_id, status):
    flags = fetch_all(ReviewFlag, review_id=review_id)
    assert flags
    assert all(f.status == status for f in flags)


@then(parsers.cfparse('the flag notes read "{notes}"'))
def flag_notes_read(review_id, notes):
    assert all(f.admin_notes == notes for f in fetch_all(ReviewFlag, review_id=review_id))


@then(parsers.cfparse('an audit record "{action_type}" reads "{details}"'))
def audit_record_reads(audit_sink, action_type, details):
    matching = [r for r in audit_sink.records if r.action_type == action_type]
    assert len(matching) == 1
    assert matching[0].details == details
