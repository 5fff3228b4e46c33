"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Complete traceability
2. Debugging capability
3. User can see history of their edits

The audit logger:
- Is synchronous, like the ledger it records
- Gracefully handles failures (a broken audit sink never breaks a ledger call)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from src.models.audit import AuditEvent, AuditEventBuilder
from src.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Set the stdlib level that structlog's filter_by_level checks against.

    structlog renders the JSON; stdlib only decides what gets through.
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend (for the UI history)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for events.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_added(
        self,
        position: int,
        amount: str,
        category: str,
        correlation_id: UUID,
        warnings: Optional[list[str]] = None,
    ) -> None:
        """Log a new expense."""
        event = AuditEventBuilder.transaction_added(
            position=position,
            amount=amount,
            category=category,
            correlation_id=correlation_id,
            warnings=warnings,
        )
        self.log(event)

    def log_transaction_updated(
        self,
        position: int,
        before: dict,
        after: dict,
        correlation_id: UUID,
        warnings: Optional[list[str]] = None,
    ) -> None:
        """Log an in-place edit."""
        event = AuditEventBuilder.transaction_updated(
            position=position,
            before=before,
            after=after,
            correlation_id=correlation_id,
            warnings=warnings,
        )
        self.log(event)

    def log_transaction_removed(
        self,
        position: int,
        removed: dict,
        correlation_id: UUID,
    ) -> None:
        """Log a removal."""
        event = AuditEventBuilder.transaction_removed(
            position=position,
            removed=removed,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_category_registered(
        self,
        category: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.category_registered(
            category=category,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_report_generated(
        self,
        report_type: str,
        parameters: dict,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.report_generated(
            report_type=report_type,
            parameters=parameters,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_operation_rejected(
        self,
        operation: str,
        error: Exception,
        correlation_id: UUID,
        position: Optional[int] = None,
    ) -> None:
        """Log a ledger call that raised before mutating anything."""
        event = AuditEventBuilder.operation_rejected(
            operation=operation,
            error=error,
            correlation_id=correlation_id,
            position=position,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., adding an expense).
    Pass it through all subsequent operations.
    """
    return uuid4()
