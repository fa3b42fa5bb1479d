"""Tests for serialized command processing."""

import threading
from unittest.mock import MagicMock, patch

import pytest
from protean import current_domain
from protean.exceptions import ExpectedVersionError
from reviews.concurrency import MAX_ATTEMPTS, KeyedLocks, author_key, process_serialized
from reviews.exceptions import CooldownError, InfrastructureError
from reviews.review.review import Review
from reviews.review.submission import SubmitReview


def _command(**overrides):
    defaults = {"eatery_id": "eatery-1", "author_id": "user-1", "health_score": 4, "hygiene_score": 4}
    defaults.update(overrides)
    return SubmitReview(**defaults)


class TestProcessSerialized:
    def test_returns_handler_result(self):
        review_id = process_serialized(_command(), author_key("user-1"))
        assert current_domain.repository_for(Review).get(review_id) is not None

    def test_repeated_first_submissions_never_duplicate(self):
        ids = {process_serialized(_command(health_score=s), author_key("user-1")) for s in (1, 2, 3)}
        assert len(ids) == 1

    def test_retries_version_conflicts(self):
        with patch("reviews.concurrency.current_domain", new_callable=MagicMock) as domain:
            domain.process.side_effect = [
                ExpectedVersionError("stale aggregate"),
                ExpectedVersionError("stale aggregate"),
                "review-1",
            ]
            assert process_serialized(_command(), author_key("user-1")) == "review-1"
        assert domain.process.call_count == MAX_ATTEMPTS

    def test_persistent_conflict_surfaces_as_infrastructure_error(self):
        with patch("reviews.concurrency.current_domain", new_callable=MagicMock) as domain:
            domain.process.side_effect = ExpectedVersionError("stale aggregate")
            with pytest.raises(InfrastructureError):
                process_serialized(_command(), author_key("user-1"))
        assert domain.process.call_count == MAX_ATTEMPTS

    def test_business_errors_are_not_retried(self):
        with patch("reviews.concurrency.current_domain", new_callable=MagicMock) as domain:
            domain.process.side_effect = CooldownError("too soon")
            with pytest.raises(CooldownError):
                process_serialized(_command(), author_key("user-1"))
        assert domain.process.call_count == 1


class TestKeyedLocks:
    def test_same_key_is_mutually_exclusive(self):
        locks = KeyedLocks()
        inside = []
        overlap = []

        def worker():
            with locks.hold("author:user-1"):
                inside.append(1)
                if len(inside) > 1:
                    overlap.append(True)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlap == []

    def test_lock_is_reentrant(self):
        locks = KeyedLocks()
        with locks.hold("points:user-1"):
            with locks.hold("points:user-1"):
                pass
