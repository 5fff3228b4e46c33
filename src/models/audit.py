"""
Audit Models for Expense Ledger

Every change to the ledger is logged for audit purposes.
This provides:
1. Traceability of every add, edit and removal
2. Debugging information when a call is rejected
3. A history the user can browse in the UI

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
Positions are recorded as they were AT THE TIME of the event; a later
removal may make them point at a different transaction.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Ledger mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_REMOVED = "transaction_removed"
    CATEGORY_REGISTERED = "category_registered"

    # Reads worth keeping
    REPORT_GENERATED = "report_generated"

    # Failures
    OPERATION_REJECTED = "operation_rejected"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


# Column names for AuditEvent.to_row(), in order
AUDIT_ROW_COLUMNS = [
    "event_id",
    "timestamp",
    "event_type",
    "severity",
    "entity_type",
    "position",
    "correlation_id",
    "description",
    "details",
    "error_message",
    "is_user_action",
]


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every ledger change creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'category', 'report')"
    )
    position: Optional[int] = Field(
        default=None,
        description="Ledger position of the transaction, if any"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., an add and its category registration)"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "position": self.position,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_row(self) -> list:
        """
        Convert to a flat row for tabular display.

        Columns follow AUDIT_ROW_COLUMNS; details are rendered as JSON.
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            "" if self.position is None else str(self.position),
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details, default=str) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(0, "12.50", "Food", correlation_id)
        event = AuditEventBuilder.operation_rejected("update", error, correlation_id)
    """

    @staticmethod
    def transaction_added(
        position: int,
        amount: str,
        category: str,
        correlation_id: UUID,
        warnings: Optional[list[str]] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            position=position,
            correlation_id=correlation_id,
            description=f"Expense added: {category[:100]} - {amount[:50]}",
            details={
                "amount": amount,
                "category": category,
                "warnings": warnings or [],
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        position: int,
        before: dict,
        after: dict,
        correlation_id: UUID,
        warnings: Optional[list[str]] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            position=position,
            correlation_id=correlation_id,
            description=f"Transaction {position} updated",
            details={
                "before": before,
                "after": after,
                "warnings": warnings or [],
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_removed(
        position: int,
        removed: dict,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REMOVED,
            entity_type="transaction",
            position=position,
            correlation_id=correlation_id,
            description=f"Transaction {position} removed",
            details={
                "removed": removed,
            },
            is_user_action=True,
        )

    @staticmethod
    def category_registered(
        category: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REGISTERED,
            entity_type="category",
            correlation_id=correlation_id,
            description=f"New category registered: {category[:100]}",
            details={
                "category": category,
            },
        )

    @staticmethod
    def report_generated(
        report_type: str,
        parameters: dict,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            entity_type="report",
            correlation_id=correlation_id,
            description=f"Report generated: {report_type}",
            details={
                "report_type": report_type,
                "parameters": parameters,
            },
        )

    @staticmethod
    def operation_rejected(
        operation: str,
        error: Exception,
        correlation_id: UUID,
        position: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            position=position,
            correlation_id=correlation_id,
            description=f"Operation rejected: {operation}",
            error_code=type(error).__name__,
            error_message=str(error),
            details={
                "operation": operation,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
