"""UpdateReview — edit an existing review by id.

Only the original author can edit, and never a deleted review. Hidden
reviews may be edited but stay hidden. Points are fixed at creation and are
not recalculated.
"""

from protean.fields import Identifier, Integer, List, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.exceptions import AuthorizationError
from reviews.review.review import Review
from reviews.review.submission import validate_photos, validate_scores


@reviews.command(part_of="Review")
class UpdateReview:
    review_id = Identifier(required=True)
    requester_id = Identifier(required=True)  # Must match original author
    health_score = Integer()
    hygiene_score = Integer()
    text_feedback = Text()
    photos = List(content_type=String, default=None)  # None keeps existing photos


@reviews.command_handler(part_of=Review)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        # Verify ownership
        if str(review.author_id) != str(command.requester_id):
            raise AuthorizationError("Only the review author can edit this review")

        validate_scores(health_score=command.health_score, hygiene_score=command.hygiene_score)
        validate_photos(command.photos)

        kwargs = {}
        if command.health_score is not None:
            kwargs["health_score"] = command.health_score
        if command.hygiene_score is not None:
            kwargs["hygiene_score"] = command.hygiene_score
        if command.text_feedback is not None:
            kwargs["text_feedback"] = command.text_feedback
        if command.photos is not None:
            kwargs["photos"] = command.photos

        review.revise(**kwargs)
        repo.add(review)
