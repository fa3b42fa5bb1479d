"""Audit sink port (abstract interface).

Moderation actions append one record each. Records are owned and queried
by an external reporting system; this domain only writes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuditRecord:
    """One moderator action."""

    actor: str
    action_type: str  # REVIEW_HIDE, REVIEW_DELETE, FLAG_RESOLVE
    target_type: str  # REVIEW, FLAG
    target_id: str
    eatery_id: str | None
    details: str
    timestamp: datetime


class AuditSink(ABC):
    """Abstract append-only audit log."""

    @abstractmethod
    def append(self, record: AuditRecord) -> None:
        """Persist one audit record."""
        ...
