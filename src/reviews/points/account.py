"""PointsAccount aggregate — one per user, created lazily on first use.

``total_points`` is signed: penalties for hidden or deleted reviews may push
it below zero. ``redeemed_points`` only grows, and only through redemption.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer

from reviews.domain import reviews
from reviews.exceptions import InsufficientBalanceError
from reviews.points.events import PointsCredited, PointsDebited, PointsRedeemed


def _assert_positive(amount):
    if amount is None or amount <= 0:
        raise ValidationError({"amount": ["Amount must be a positive number of points"]})


@reviews.aggregate
class PointsAccount:
    user_id = Identifier(identifier=True, required=True)
    total_points = Integer(default=0)
    redeemed_points = Integer(default=0)
    last_updated = DateTime()

    @classmethod
    def open(cls, user_id):
        """Zero-balance account for a user seen for the first time."""
        return cls(
            user_id=user_id,
            total_points=0,
            redeemed_points=0,
            last_updated=datetime.now(UTC),
        )

    def credit(self, amount, reason=None):
        _assert_positive(amount)

        now = datetime.now(UTC)
        self.total_points = self.total_points + amount
        self.last_updated = now

        self.raise_(
            PointsCredited(
                user_id=str(self.user_id),
                amount=amount,
                total_points=self.total_points,
                reason=reason,
                credited_at=now,
            )
        )

    def debit(self, amount, reason=None):
        """Take points back with no floor on the balance."""
        _assert_positive(amount)

        now = datetime.now(UTC)
        self.total_points = self.total_points - amount
        self.last_updated = now

        self.raise_(
            PointsDebited(
                user_id=str(self.user_id),
                amount=amount,
                total_points=self.total_points,
                reason=reason,
                debited_at=now,
            )
        )

    def redeem(self, amount):
        """Move points from the spendable balance to the redeemed tally."""
        _assert_positive(amount)
        if self.total_points < amount:
            raise InsufficientBalanceError("Not enough points to redeem")

        now = datetime.now(UTC)
        self.total_points = self.total_points - amount
        self.redeemed_points = self.redeemed_points + amount
        self.last_updated = now

        self.raise_(
            PointsRedeemed(
                user_id=str(self.user_id),
                amount=amount,
                total_points=self.total_points,
                redeemed_points=self.redeemed_points,
                redeemed_at=now,
            )
        )
