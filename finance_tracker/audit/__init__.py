"""Audit logging package."""

from finance_tracker.audit.logger import AuditLogger, create_correlation_id
from finance_tracker.audit.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditLogger",
    "AuditSeverity",
    "create_correlation_id",
]
