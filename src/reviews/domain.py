"""Reviews & Rewards bounded context — eatery reviews, moderation and points.

Handles the review lifecycle (submit, edit, self-delete, flag), moderator
actions (hide, delete, resolve flags), the per-user points ledger and the
rewards catalogue. Review aggregates feed the recommendation scorer through
read-only queries.
"""

from protean.domain import Domain

from reviews.utils.logging import configure_logging, get_logger

configure_logging()

reviews = Domain(name="reviews")

logger = get_logger(__name__)
