"""Application tests for the points ledger and rewards catalogue."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from reviews.exceptions import InsufficientBalanceError
from reviews.points.account import PointsAccount
from reviews.points.ledger import RedeemPoints, credit_points, debit_points
from reviews.points.queries import available_rewards, points_balance
from reviews.points.rewards import AddReward, RedeemReward, Reward


def _credit(user_id, amount):
    credit_points(user_id, amount)


def _redeem(user_id, amount):
    return current_domain.process(RedeemPoints(user_id=user_id, amount=amount), asynchronous=False)


def _add_reward(name="Free smoothie", points_required=30, **extra):
    return current_domain.process(
        AddReward(name=name, points_required=points_required, **extra),
        asynchronous=False,
    )


class TestLedgerHelpers:
    def test_credit_opens_account_lazily(self):
        credit_points("user-9", 15)
        assert points_balance("user-9").total_points == 15

    def test_debit_opens_account_lazily_and_goes_negative(self):
        debit_points("user-9", 25)
        assert points_balance("user-9").total_points == -25

    def test_balance_of_unknown_user_is_zero_and_not_persisted(self):
        balance = points_balance("nobody")
        assert balance.total_points == 0
        assert balance.redeemed_points == 0
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(PointsAccount).get("nobody")


class TestRedeemPoints:
    def test_redeem_returns_remaining_balance(self):
        _credit("user-1", 50)
        assert _redeem("user-1", 20) == 30

        balance = points_balance("user-1")
        assert balance.total_points == 30
        assert balance.redeemed_points == 20

    def test_redeem_more_than_balance_fails(self):
        _credit("user-1", 10)
        with pytest.raises(InsufficientBalanceError):
            _redeem("user-1", 11)
        assert points_balance("user-1").total_points == 10

    def test_redeem_without_account_fails(self):
        with pytest.raises(InsufficientBalanceError):
            _redeem("user-1", 1)

    def test_redeem_non_positive_amount_fails(self):
        _credit("user-1", 10)
        with pytest.raises(ValidationError):
            _redeem("user-1", 0)


class TestRewards:
    def test_add_reward(self):
        reward_id = _add_reward(description="Any size")
        reward = current_domain.repository_for(Reward).get(reward_id)
        assert reward.name == "Free smoothie"
        assert reward.points_required == 30
        assert reward.active is True

    def test_reward_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _add_reward(points_required=0)

    def test_available_rewards_cheapest_first(self):
        _add_reward(name="Lunch voucher", points_required=100)
        _add_reward(name="Free smoothie", points_required=30)

        assert [r.name for r in available_rewards()] == ["Free smoothie", "Lunch voucher"]

    def test_redeem_reward_spends_points(self):
        reward_id = _add_reward()
        _credit("user-1", 45)

        remaining = current_domain.process(RedeemReward(user_id="user-1", reward_id=reward_id), asynchronous=False)

        assert remaining == 15
        assert points_balance("user-1").redeemed_points == 30

    def test_redeem_reward_with_too_few_points_fails(self):
        reward_id = _add_reward()
        _credit("user-1", 29)
        with pytest.raises(InsufficientBalanceError):
            current_domain.process(RedeemReward(user_id="user-1", reward_id=reward_id), asynchronous=False)

    def test_inactive_reward_cannot_be_redeemed(self):
        reward_id = _add_reward()
        repo = current_domain.repository_for(Reward)
        reward = repo.get(reward_id)
        reward.active = False
        repo.add(reward)
        _credit("user-1", 100)

        with pytest.raises(ValidationError):
            current_domain.process(RedeemReward(user_id="user-1", reward_id=reward_id), asynchronous=False)
        assert points_balance("user-1").total_points == 100

    def test_unknown_reward_fails(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RedeemReward(user_id="user-1", reward_id="missing"), asynchronous=False)
