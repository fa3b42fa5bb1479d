"""Domain events for the PointsAccount and Reward aggregates."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from reviews.domain import reviews


@reviews.event(part_of="PointsAccount")
class PointsCredited:
    """Points were added to a user's balance."""

    __version__ = 1

    user_id = Identifier(required=True)
    amount = Integer(required=True)
    total_points = Integer(required=True)
    reason = String(max_length=255)
    credited_at = DateTime(required=True)


@reviews.event(part_of="PointsAccount")
class PointsDebited:
    """Points were taken back from a user's balance, possibly below zero."""

    __version__ = 1

    user_id = Identifier(required=True)
    amount = Integer(required=True)
    total_points = Integer(required=True)
    reason = String(max_length=255)
    debited_at = DateTime(required=True)


@reviews.event(part_of="PointsAccount")
class PointsRedeemed:
    """A user spent points from their balance."""

    __version__ = 1

    user_id = Identifier(required=True)
    amount = Integer(required=True)
    total_points = Integer(required=True)
    redeemed_points = Integer(required=True)
    redeemed_at = DateTime(required=True)


@reviews.event(part_of="Reward")
class RewardRedeemed:
    """A user exchanged points for a reward."""

    __version__ = 1

    reward_id = Identifier(required=True)
    user_id = Identifier(required=True)
    name = String(required=True)
    description = Text()
    points_required = Integer(required=True)
    redeemed_at = DateTime(required=True)
