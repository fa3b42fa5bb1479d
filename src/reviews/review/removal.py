"""DeleteReview — the author withdraws their own review.

Withdrawing soft-deletes the review and takes back the points it earned,
even if that leaves the balance negative. Hidden reviews can only be removed
by a moderator.
"""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.exceptions import AuthorizationError
from reviews.points.ledger import debit_points
from reviews.review.review import Review

logger = structlog.get_logger(__name__)


@reviews.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    requester_id = Identifier(required=True)


@reviews.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        if str(review.author_id) != str(command.requester_id):
            raise AuthorizationError("Only the review author can delete this review")

        review.withdraw()

        reversal = review.claim_points_reversal()
        if reversal:
            debit_points(review.author_id, reversal, reason=f"Review {review.id} deleted by author")

        repo.add(review)
        logger.info(
            "Review withdrawn",
            review_id=str(review.id),
            author_id=str(review.author_id),
            points_reversed=reversal,
        )
