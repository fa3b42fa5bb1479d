"""Read-side queries over review flags."""

from reviews.flag.flag import FlagStatus, ReviewFlag
from reviews.utils.query import as_utc, fetch_all


def _newest_first(flag):
    created = as_utc(flag.created_at)
    return created.timestamp() if created else 0.0


def flags(status=None) -> list[ReviewFlag]:
    """All flags, optionally narrowed to one status, newest first."""
    filters = {}
    if status is not None:
        filters["status"] = FlagStatus(status.upper() if isinstance(status, str) else status).value
    return sorted(fetch_all(ReviewFlag, **filters), key=_newest_first, reverse=True)


def pending_flags() -> list[ReviewFlag]:
    return flags(FlagStatus.PENDING)
