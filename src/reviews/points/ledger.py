"""Points ledger — credit, debit and redeem against a user's account.

The helpers are called from inside other command handlers (review
submission, self-deletion, moderation) so the account change commits in the
same Unit of Work as the review change that caused it. ``RedeemPoints`` is
the user-facing entry point.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.points.account import PointsAccount

logger = structlog.get_logger(__name__)


def account_for(user_id) -> PointsAccount:
    """Load the user's account, or open a zero-balance one."""
    try:
        return current_domain.repository_for(PointsAccount).get(str(user_id))
    except ObjectNotFoundError:
        return PointsAccount.open(str(user_id))


def credit_points(user_id, amount, reason=None) -> PointsAccount:
    account = account_for(user_id)
    account.credit(amount, reason=reason)
    current_domain.repository_for(PointsAccount).add(account)
    return account


def debit_points(user_id, amount, reason=None) -> PointsAccount:
    account = account_for(user_id)
    account.debit(amount, reason=reason)
    current_domain.repository_for(PointsAccount).add(account)
    logger.info(
        "Points debited",
        user_id=str(user_id),
        amount=amount,
        total_points=account.total_points,
        reason=reason,
    )
    return account


def redeem_points(user_id, amount) -> PointsAccount:
    account = account_for(user_id)
    account.redeem(amount)
    current_domain.repository_for(PointsAccount).add(account)
    return account


@reviews.command(part_of="PointsAccount")
class RedeemPoints:
    user_id = Identifier(required=True)
    amount = Integer(required=True)


@reviews.command_handler(part_of=PointsAccount)
class PointsLedgerHandler:
    @handle(RedeemPoints)
    def redeem(self, command):
        account = redeem_points(command.user_id, command.amount)
        return account.total_points
