"""Business-rule errors raised by the Reviews domain.

Input-shape problems use Protean's ``ValidationError`` and missing records
use ``ObjectNotFoundError``. The classes below cover rejections that are not
about the shape of the input.
"""

from protean.exceptions import InvalidOperationError


class RateLimitError(InvalidOperationError):
    """The author reached the daily cap of first-time reviews."""


class CooldownError(InvalidOperationError):
    """The author reviewed this eatery too recently."""


class AuthorizationError(InvalidOperationError):
    """The principal does not own the record or lacks the required role."""


class InsufficientBalanceError(InvalidOperationError):
    """A redemption would exceed the account's available points."""


class InfrastructureError(Exception):
    """Persistence kept failing; safe for the caller to retry."""
