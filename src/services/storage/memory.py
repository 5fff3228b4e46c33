"""
In-Memory Audit Storage

Keeps the most recent audit events in a bounded buffer.
Oldest events are dropped once the limit is reached.
"""

from collections import deque
from typing import Optional
from uuid import UUID

from src.config import get_settings
from src.models.audit import AuditEvent, AuditEventType
from src.services.storage.interface import AuditStorageInterface, StorageError


class InMemoryAuditStorage(AuditStorageInterface):
    """Audit storage backed by a bounded deque."""

    def __init__(self, max_events: Optional[int] = None):
        if max_events is None:
            max_events = get_settings().app.audit_history_limit
        if max_events < 1:
            raise StorageError(f"max_events must be at least 1, got {max_events}")
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def __len__(self) -> int:
        return len(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_type(
        self,
        event_type: AuditEventType,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.event_type == event_type]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        if limit < 1:
            return []
        return list(reversed(self._events))[:limit]
