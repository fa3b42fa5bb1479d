"""Application tests for the review read side."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from recommendations.scoring import quality_points
from reviews.moderation.moderation import DeleteReviewByAdmin, HideReview
from reviews.review.queries import (
    AggregatedRatings,
    aggregated_ratings,
    aggregated_ratings_for,
    moderation_view,
    round_half_up,
    user_review,
    visible_reviews,
)
from reviews.review.removal import DeleteReview
from reviews.review.submission import SubmitReview


def _submit_review(author_id, health_score, hygiene_score, eatery_id="eatery-1"):
    return current_domain.process(
        SubmitReview(
            eatery_id=eatery_id,
            author_id=author_id,
            health_score=health_score,
            hygiene_score=hygiene_score,
        ),
        asynchronous=False,
    )


def _hide(review_id):
    current_domain.process(
        HideReview(review_id=review_id, moderator_id="mod-1", moderator_role="MODERATOR", reason="spam"),
        asynchronous=False,
    )


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(4.25, 4.3), (4.35, 4.4), (4.24, 4.2), (3.0, 3.0), (11 / 3, 3.7)],
    )
    def test_rounds_to_one_decimal(self, value, expected):
        assert round_half_up(value) == expected

    def test_none_passes_through(self):
        assert round_half_up(None) is None


class TestAggregatedRatings:
    def test_no_reviews_gives_empty_aggregate(self):
        ratings = aggregated_ratings("eatery-1")
        assert ratings == AggregatedRatings(average_health=None, average_hygiene=None, review_count=0)

    def test_averages_visible_reviews(self):
        _submit_review("user-1", 5, 4)
        _submit_review("user-2", 4, 4)
        _submit_review("user-3", 4, 3)

        ratings = aggregated_ratings("eatery-1")
        assert ratings.average_health == 4.3
        assert ratings.average_hygiene == 3.7
        assert ratings.review_count == 3

    def test_hidden_and_deleted_reviews_are_excluded(self):
        _submit_review("user-1", 5, 5)
        hidden = _submit_review("user-2", 1, 1)
        deleted = _submit_review("user-3", 1, 1)
        _hide(hidden)
        current_domain.process(DeleteReview(review_id=deleted, requester_id="user-3"), asynchronous=False)

        ratings = aggregated_ratings("eatery-1")
        assert ratings.average_health == 5.0
        assert ratings.review_count == 1

    def test_unknown_eatery(self):
        with pytest.raises(ObjectNotFoundError):
            aggregated_ratings("missing")

    def test_bulk_aggregates_skip_eateries_without_reviews(self):
        _submit_review("user-1", 4, 4, eatery_id="eatery-1")
        _submit_review("user-1", 2, 3, eatery_id="eatery-2")

        ratings = aggregated_ratings_for(["eatery-1", "eatery-2", "eatery-3"])

        assert set(ratings) == {"eatery-1", "eatery-2"}
        assert ratings["eatery-2"] == AggregatedRatings(2.0, 3.0, 1)

    def test_unrounded_aggregates_keep_raw_means(self):
        for author_id, score in (("user-1", 5), ("user-2", 4), ("user-3", 4)):
            _submit_review(author_id, score, score)

        raw = aggregated_ratings_for(["eatery-1"], rounded=False)["eatery-1"]

        assert raw.average_health == pytest.approx(13 / 3)
        assert raw.average_hygiene == pytest.approx(13 / 3)
        assert quality_points(raw) == pytest.approx(39.472, abs=0.001)
        assert aggregated_ratings("eatery-1").average_health == 4.3


class TestListings:
    def test_visible_reviews_sorted_by_health(self):
        _submit_review("user-1", 3, 5)
        _submit_review("user-2", 5, 1)

        listed = visible_reviews("eatery-1", "HEALTH")
        assert [r.health_score for r in listed] == [5, 3]

    def test_visible_reviews_sorted_by_hygiene(self):
        _submit_review("user-1", 3, 5)
        _submit_review("user-2", 5, 1)

        listed = visible_reviews("eatery-1", "hygiene")
        assert [r.hygiene_score for r in listed] == [5, 1]

    def test_visible_reviews_default_newest_first(self):
        older = _submit_review("user-1", 3, 5)
        newer = _submit_review("user-2", 5, 1)

        assert [str(r.id) for r in visible_reviews("eatery-1")] == [newer, older]

    def test_hidden_reviews_only_in_moderation_view(self):
        _submit_review("user-1", 3, 5)
        hidden = _submit_review("user-2", 5, 1)
        _hide(hidden)

        assert hidden not in [str(r.id) for r in visible_reviews("eatery-1")]
        assert hidden in [str(r.id) for r in moderation_view("eatery-1")]

    def test_deleted_reviews_excluded_from_moderation_view(self):
        review_id = _submit_review("user-1", 3, 5)
        current_domain.process(
            DeleteReviewByAdmin(review_id=review_id, moderator_id="admin-1", moderator_role="ADMIN", reason="spam"),
            asynchronous=False,
        )
        assert moderation_view("eatery-1") == []

    def test_user_review_returns_active_review(self):
        review_id = _submit_review("user-1", 3, 5)
        assert str(user_review("eatery-1", "user-1").id) == review_id
        assert user_review("eatery-1", "user-2") is None

    def test_user_review_ignores_deleted(self):
        review_id = _submit_review("user-1", 3, 5)
        current_domain.process(DeleteReview(review_id=review_id, requester_id="user-1"), asynchronous=False)
        assert user_review("eatery-1", "user-1") is None
