"""Read-side queries over points accounts and rewards."""

from dataclasses import dataclass
from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviews.points.account import PointsAccount
from reviews.points.rewards import Reward
from reviews.utils.query import fetch_all


@dataclass(frozen=True)
class PointsBalance:
    user_id: str
    total_points: int = 0
    redeemed_points: int = 0
    last_updated: datetime | None = None


def points_balance(user_id) -> PointsBalance:
    """Current balance. Users without an account read as zero; nothing is written."""
    try:
        account = current_domain.repository_for(PointsAccount).get(str(user_id))
    except ObjectNotFoundError:
        return PointsBalance(user_id=str(user_id))
    return PointsBalance(
        user_id=str(account.user_id),
        total_points=account.total_points,
        redeemed_points=account.redeemed_points,
        last_updated=account.last_updated,
    )


def available_rewards() -> list[Reward]:
    return sorted(fetch_all(Reward, active=True), key=lambda r: (r.points_required, r.name))
