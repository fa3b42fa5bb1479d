"""BDD tests for the review lifecycle."""

from protean import current_domain
from pytest_bdd import parsers, scenarios, when
from reviews.exceptions import CooldownError, RateLimitError
from reviews.review.removal import DeleteReview
from reviews.review.submission import SubmitReview

scenarios("features/review_lifecycle.feature")


@when(
    parsers.cfparse('user "{user_id}" reviews "{eatery_id}" with text "{text}" and {photo_count:d} photos'),
    target_fixture="review_id",
)
def user_reviews(user_id, eatery_id, text, photo_count, error):
    command = SubmitReview(
        eatery_id=eatery_id,
        author_id=user_id,
        health_score=4,
        hygiene_score=5,
        text_feedback=text,
        photos=[f"photo-{n}.jpg" for n in range(photo_count)],
    )
    try:
        return current_domain.process(command, asynchronous=False)
    except (CooldownError, RateLimitError) as exc:
        error["exc"] = exc
        return None


@when(parsers.cfparse('user "{user_id}" deletes the review'))
def user_deletes(review_id, user_id):
    current_domain.process(DeleteReview(review_id=review_id, requester_id=user_id), asynchronous=False)
