"""Audit sink factory and the write helper used by moderation.

A failed audit write never undoes the moderation action it describes; it is
logged as a warning instead.
"""

from datetime import UTC, datetime

import structlog

from reviews.audit.memory_adapter import InMemoryAuditSink
from reviews.audit.port import AuditRecord, AuditSink

logger = structlog.get_logger(__name__)

_current_sink: AuditSink | None = None


def get_audit_sink() -> AuditSink:
    """Return the current audit sink. Defaults to InMemoryAuditSink."""
    global _current_sink
    if _current_sink is None:
        _current_sink = InMemoryAuditSink()
    return _current_sink


def set_audit_sink(sink: AuditSink) -> None:
    """Override the active audit sink (useful for tests)."""
    global _current_sink
    _current_sink = sink


def reset_audit_sink() -> None:
    """Reset to default audit sink."""
    global _current_sink
    _current_sink = None


def record_admin_action(actor, action_type, target_type, target_id, eatery_id, details) -> bool:
    """Append an audit record. Returns False if the sink rejected it."""
    record = AuditRecord(
        actor=str(actor),
        action_type=action_type,
        target_type=target_type,
        target_id=str(target_id),
        eatery_id=str(eatery_id) if eatery_id is not None else None,
        details=details,
        timestamp=datetime.now(UTC),
    )
    try:
        get_audit_sink().append(record)
    except Exception as exc:
        logger.warning(
            "Audit write failed; moderation action kept",
            actor=record.actor,
            action_type=action_type,
            target_type=target_type,
            target_id=record.target_id,
            error=str(exc),
        )
        return False
    return True
