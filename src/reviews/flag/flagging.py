"""FlagReview — any signed-in user reports a review to moderators."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.flag.flag import ReviewFlag
from reviews.review.review import Review
from reviews.utils.query import fetch_all


@reviews.command(part_of="ReviewFlag")
class FlagReview:
    review_id = Identifier(required=True)
    flagger_id = Identifier(required=True)
    reason = Text()


@reviews.command_handler(part_of=ReviewFlag)
class FlagReviewHandler:
    @handle(FlagReview)
    def flag_review(self, command):
        review = current_domain.repository_for(Review).get(command.review_id)
        if review.is_deleted:
            raise ValidationError({"review": ["Cannot flag a deleted review"]})

        existing = fetch_all(
            ReviewFlag,
            review_id=str(command.review_id),
            flagger_id=str(command.flagger_id),
        )
        if existing:
            raise ValidationError({"review_id": ["You have already flagged this review"]})

        flag = ReviewFlag.raise_flag(
            review_id=str(command.review_id),
            flagger_id=command.flagger_id,
            reason=command.reason,
        )
        current_domain.repository_for(ReviewFlag).add(flag)
        return str(flag.id)
