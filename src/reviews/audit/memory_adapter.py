"""In-memory audit sink for development and testing.

Can be switched into a failing mode to exercise the path where the audit
write fails but the moderation action still commits.
"""

from reviews.audit.port import AuditRecord, AuditSink


class AuditSinkUnavailable(Exception):
    pass


class InMemoryAuditSink(AuditSink):
    def __init__(self) -> None:
        self.records: list[AuditRecord] = []
        self.should_fail: bool = False
        self.failure_reason: str = "Audit store unavailable"

    def configure(self, should_fail: bool, failure_reason: str = "Audit store unavailable") -> None:
        """Configure sink behavior at runtime."""
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def append(self, record: AuditRecord) -> None:
        if self.should_fail:
            raise AuditSinkUnavailable(self.failure_reason)
        self.records.append(record)
