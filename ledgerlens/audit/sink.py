"""
Audit Sinks

DESIGN DECISION: Audit events go to a sink behind an abstract interface.
ledgerlens keeps nothing on disk, so the shipped sink is an in-memory
ring buffer. Callers that want events elsewhere implement AuditSink.

Sinks are append-only - we never delete or modify events.
"""

from abc import ABC, abstractmethod
from collections import deque
from threading import Lock
from typing import Optional

from ledgerlens.config import get_settings
from ledgerlens.models.audit import AuditEvent, AuditEventType


class AuditSink(ABC):
    """Abstract interface for audit event storage."""

    @abstractmethod
    def append_event(self, event: AuditEvent) -> None:
        """
        Append an audit event.

        Args:
            event: The audit event to record
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass

    @abstractmethod
    def get_events_by_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        """
        Get all retained events of one type, in chronological order.
        """
        pass


class InMemoryAuditSink(AuditSink):
    """
    Bounded, thread-safe in-memory sink.

    Oldest events fall off once max_events is reached.
    """

    def __init__(self, max_events: Optional[int] = None):
        if max_events is None:
            max_events = get_settings().reports.audit_buffer_size
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._lock = Lock()

    def append_event(self, event: AuditEvent) -> None:
        with self._lock:
            self._events.append(event)

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        with self._lock:
            events = list(self._events)
        return list(reversed(events))[:limit]

    def get_events_by_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        with self._lock:
            return [event for event in self._events if event.event_type == event_type]

    def __len__(self) -> int:
        return len(self._events)
