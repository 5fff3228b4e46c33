"""
Abstract Storage Interface

DESIGN DECISION: The audit trail is written through an abstract interface.
This allows us to:
1. Keep events in memory for the app and for tests
2. Add a durable backend later without touching the logger
3. Keep business logic decoupled from storage implementation

The ledger itself has no storage layer; it lives for the process.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from src.models.audit import AuditEvent, AuditEventType


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one add and its side effects).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_events_by_type(
        self,
        event_type: AuditEventType,
    ) -> list[AuditEvent]:
        """
        Get all events of one type.

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
