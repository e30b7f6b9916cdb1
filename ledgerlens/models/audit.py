"""
Audit Models for ledgerlens

Every significant action in the repository and every data gap found
while building reports is recorded as an audit event.
This provides:
1. Traceability of fetches and cache refreshes
2. A diagnostic channel for data that reports had to leave out
3. Debugging information when a fetch fails

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
Report functions never raise for odd data; they emit an event instead.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


MAX_DESCRIPTION_LENGTH = 500


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Storage boundary
    LEDGER_FETCH_STARTED = "ledger_fetch_started"
    LEDGER_FETCH_COMPLETED = "ledger_fetch_completed"
    LEDGER_FETCH_FAILED = "ledger_fetch_failed"

    # Parsing and cache
    LEDGER_PARSED = "ledger_parsed"
    CACHE_HIT = "cache_hit"
    CACHE_REFRESHED = "cache_refreshed"
    REPOSITORY_CREATED = "repository_created"
    REPOSITORY_CLEARED = "repository_cleared"

    # Report diagnostics
    ASSET_UNCATEGORIZED = "asset_uncategorized"
    BASELINE_FALLBACK = "baseline_fallback"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
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
        description="Type of entity (e.g., 'ledger', 'account')"
    )
    entity_name: Optional[str] = Field(
        default=None,
        description="Name of the entity, e.g. an account path"
    )

    description: str = Field(
        ...,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v):
        """Clip descriptions to MAX_DESCRIPTION_LENGTH, ending with '...'."""
        if isinstance(v, str) and len(v) > MAX_DESCRIPTION_LENGTH:
            return v[:MAX_DESCRIPTION_LENGTH - 3] + "..."
        return v

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
            "entity_name": self.entity_name,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.ledger_parsed(120, 14)
        event = AuditEventBuilder.asset_uncategorized("assets:misc:jar", balance)
    """

    @staticmethod
    def ledger_fetch_started(force_refresh: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_FETCH_STARTED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            description="Fetching ledger text from storage",
            details={"force_refresh": force_refresh},
        )

    @staticmethod
    def ledger_fetch_completed(
        size_chars: int,
        last_modified: Optional[datetime],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_FETCH_COMPLETED,
            entity_type="ledger",
            description=f"Fetched {size_chars} characters of ledger text",
            details={
                "size_chars": size_chars,
                "last_modified": last_modified.isoformat() if last_modified else None,
            },
        )

    @staticmethod
    def ledger_fetch_failed(error: Exception) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_FETCH_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description="Ledger fetch failed",
            details={"error_type": type(error).__name__},
            error_message=str(error),
        )

    @staticmethod
    def ledger_parsed(transaction_count: int, budget_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_PARSED,
            entity_type="ledger",
            description=f"Parsed {transaction_count} transactions and {budget_count} budgets",
            details={
                "transaction_count": transaction_count,
                "budget_count": budget_count,
            },
        )

    @staticmethod
    def cache_hit() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CACHE_HIT,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            description="Served ledger snapshot from cache",
        )

    @staticmethod
    def cache_refreshed(replaced_existing: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CACHE_REFRESHED,
            entity_type="ledger",
            description="Ledger snapshot replaced" if replaced_existing else "Ledger snapshot populated",
            details={"replaced_existing": replaced_existing},
        )

    @staticmethod
    def repository_created(storage_type: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPOSITORY_CREATED,
            entity_type="repository",
            entity_name=storage_type,
            description=f"Shared repository created over {storage_type}",
        )

    @staticmethod
    def repository_cleared() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPOSITORY_CLEARED,
            entity_type="repository",
            description="Shared repository discarded",
        )

    @staticmethod
    def asset_uncategorized(account: str, balance: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ASSET_UNCATEGORIZED,
            severity=AuditSeverity.WARNING,
            entity_type="account",
            entity_name=account,
            description=f"Asset not categorized: {account}",
            details={"balance": balance},
        )

    @staticmethod
    def baseline_fallback(year: int, baseline: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BASELINE_FALLBACK,
            entity_type="ledger",
            description=f"No opening balances transaction, using balances before {year}-01-01",
            details={"year": year, "baseline": baseline},
        )
