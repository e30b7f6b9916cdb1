"""
Audit Logger

DESIGN DECISION: Every fetch, cache change and report-time data gap is logged.
This provides:
1. Traceability of what the repository fetched and when
2. A non-fatal diagnostic channel for the aggregation engine
3. Debugging capability when storage misbehaves

The audit logger:
- Is synchronous; report functions call it from plain code
- Gracefully handles sink failures (never crashes a report)
- Always logs locally through structlog
"""

from typing import Optional

import structlog

from ledgerlens.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from ledgerlens.audit.sink import AuditSink


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


def get_logger(name: Optional[str] = None):
    """Get a structlog logger bound to the ledgerlens configuration."""
    return structlog.get_logger(name or "ledgerlens")


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional AuditSink (for inspection by callers and tests)
    """

    def __init__(
        self,
        sink: Optional[AuditSink] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Where events are retained.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = get_logger("ledgerlens.audit")

    @property
    def sink(self) -> Optional[AuditSink]:
        return self._sink

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Appends to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink is not None:
            try:
                self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_fetch_started(self, force_refresh: bool) -> None:
        """Log the start of a storage fetch."""
        self.log(AuditEventBuilder.ledger_fetch_started(force_refresh))

    def log_fetch_completed(self, size_chars: int, last_modified) -> None:
        """Log a successful storage fetch."""
        self.log(AuditEventBuilder.ledger_fetch_completed(size_chars, last_modified))

    def log_fetch_failed(self, error: Exception) -> None:
        """Log a storage fetch failure. The caller re-raises."""
        self.log(AuditEventBuilder.ledger_fetch_failed(error))

    def log_ledger_parsed(self, transaction_count: int, budget_count: int) -> None:
        """Log parse results."""
        self.log(AuditEventBuilder.ledger_parsed(transaction_count, budget_count))

    def log_cache_hit(self) -> None:
        """Log a cached read."""
        self.log(AuditEventBuilder.cache_hit())

    def log_cache_refreshed(self, replaced_existing: bool) -> None:
        """Log a snapshot swap."""
        self.log(AuditEventBuilder.cache_refreshed(replaced_existing))

    def log_repository_created(self, storage_type: str) -> None:
        self.log(AuditEventBuilder.repository_created(storage_type))

    def log_repository_cleared(self) -> None:
        self.log(AuditEventBuilder.repository_cleared())

    def log_asset_uncategorized(self, account: str, balance) -> None:
        """Log an asset account that matched no category."""
        self.log(AuditEventBuilder.asset_uncategorized(account, str(balance)))

    def log_baseline_fallback(self, year: int, baseline) -> None:
        """Log that no opening balances transaction was found."""
        self.log(AuditEventBuilder.baseline_fallback(year, str(baseline)))
