"""Serialized command processing.

Commands that read-then-write (first-time submission checks, ledger
mutations, moderation) run under a per-key lock held for the whole Unit of
Work, so two requests for the same author, account or review cannot
interleave inside this process. Across processes, Protean's aggregate
versioning rejects the stale write with ``ExpectedVersionError``; that is
retried a bounded number of times and then surfaced as InfrastructureError.
"""

import threading
from collections import defaultdict
from contextlib import contextmanager

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from reviews.exceptions import InfrastructureError

logger = structlog.get_logger(__name__)

MAX_ATTEMPTS = 3


class KeyedLocks:
    """One re-entrant lock per key, created on demand."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = defaultdict(threading.RLock)

    @contextmanager
    def hold(self, key: str):
        with self._guard:
            lock = self._locks[key]
        with lock:
            yield


_locks = KeyedLocks()


def author_key(author_id) -> str:
    return f"author:{author_id}"


def points_key(user_id) -> str:
    return f"points:{user_id}"


def flag_key(flag_id) -> str:
    return f"flag:{flag_id}"


def review_key(review_id) -> str:
    return f"review:{review_id}"


def process_serialized(command, key: str):
    """Process ``command`` synchronously while holding the lock for ``key``."""
    with _locks.hold(key):
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                return current_domain.process(command, asynchronous=False)
            except ExpectedVersionError as exc:
                logger.warning(
                    "Concurrent update detected, retrying",
                    command=type(command).__name__,
                    key=key,
                    attempt=attempt,
                    error=str(exc),
                )
    raise InfrastructureError(f"{type(command).__name__} could not be committed after {MAX_ATTEMPTS} attempts")
