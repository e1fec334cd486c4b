"""
Audit Models for Finance Tracker

Every load and every write against the store produces an audit event,
as does every rejected form submission. Events are written to the
structured log so a session can be reconstructed afterwards.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    DATA_LOADED = "data_loaded"
    DATA_LOAD_FAILED = "data_load_failed"

    # Writes
    TRANSACTION_CREATED = "transaction_created"
    TRANSACTION_CREATE_FAILED = "transaction_create_failed"
    GOAL_CREATED = "goal_created"
    GOAL_CREATE_FAILED = "goal_create_failed"

    # Forms
    VALIDATION_FAILED = "validation_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="'transaction', 'goal' or 'data'"
    )
    entity_id: Optional[str] = None

    # Groups the events of one user action (submit -> write -> reload)
    correlation_id: Optional[UUID] = None

    description: str
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.data_loaded(transaction_count=12, goal_count=2)
        await audit_logger.log(event)
    """

    @staticmethod
    def data_loaded(
        transaction_count: int,
        goal_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOADED,
            entity_type="data",
            correlation_id=correlation_id,
            description=f"Loaded {transaction_count} transactions and {goal_count} goals",
            details={
                "transaction_count": transaction_count,
                "goal_count": goal_count,
            },
        )

    @staticmethod
    def data_load_failed(
        error_message: str,
        initial: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="data",
            correlation_id=correlation_id,
            description="Initial load failed" if initial else "Reload failed, keeping previous data",
            error_message=error_message,
            details={"initial": initial},
        )

    @staticmethod
    def transaction_created(
        transaction_id: str,
        transaction_type: str,
        amount: str,
        split_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_CREATED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Created {transaction_type} transaction of {amount}",
            details={
                "type": transaction_type,
                "amount": amount,
                "split_count": split_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_create_failed(
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_CREATE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="transaction",
            correlation_id=correlation_id,
            description="Store rejected the new transaction",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def goal_created(
        goal_id: str,
        name: str,
        target_amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_CREATED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description=f"Created goal '{name}'",
            details={"target_amount": target_amount},
            is_user_action=True,
        )

    @staticmethod
    def goal_create_failed(
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_CREATE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="goal",
            correlation_id=correlation_id,
            description="Store rejected the new goal",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        entity_type: str,
        field: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            correlation_id=correlation_id,
            description=f"Rejected {entity_type} form input",
            error_message=error_message,
            details={"field": field},
            is_user_action=True,
        )
