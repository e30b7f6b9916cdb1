"""Audit logging package."""

from ledgerlens.audit.logger import AuditLogger, get_logger
from ledgerlens.audit.sink import AuditSink, InMemoryAuditSink

__all__ = ["AuditLogger", "AuditSink", "InMemoryAuditSink", "get_logger"]
