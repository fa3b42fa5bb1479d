"""Rewards catalogue — items users can exchange their points for.

Redeeming a reward debits its price through the ledger's redemption rule,
so a reward can never take a balance below zero.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.points.events import RewardRedeemed
from reviews.points.ledger import redeem_points


@reviews.aggregate
class Reward:
    name = String(required=True, max_length=200)
    description = Text()
    points_required = Integer(required=True, min_value=1)
    active = Boolean(default=True)

    def redeemed_by(self, user_id):
        if not self.active:
            raise ValidationError({"reward": ["Reward is no longer available"]})

        self.raise_(
            RewardRedeemed(
                reward_id=str(self.id),
                user_id=str(user_id),
                name=self.name,
                description=self.description,
                points_required=self.points_required,
                redeemed_at=datetime.now(UTC),
            )
        )


@reviews.command(part_of="Reward")
class AddReward:
    name = String(required=True, max_length=200)
    description = Text()
    points_required = Integer(required=True)


@reviews.command(part_of="Reward")
class RedeemReward:
    user_id = Identifier(required=True)
    reward_id = Identifier(required=True)


@reviews.command_handler(part_of=Reward)
class RewardHandler:
    @handle(AddReward)
    def add_reward(self, command):
        reward = Reward(
            name=command.name,
            description=command.description,
            points_required=command.points_required,
        )
        current_domain.repository_for(Reward).add(reward)
        return str(reward.id)

    @handle(RedeemReward)
    def redeem_reward(self, command):
        repo = current_domain.repository_for(Reward)
        reward = repo.get(command.reward_id)

        reward.redeemed_by(command.user_id)
        account = redeem_points(command.user_id, reward.points_required)
        repo.add(reward)
        return account.total_points
