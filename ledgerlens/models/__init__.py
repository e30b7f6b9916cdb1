"""
Data Models Package

This package contains all Pydantic models used in ledgerlens.
Everything the parser produces and every report the engine returns
conforms to these schemas.
"""

from ledgerlens.models.ledger import (
    Budget,
    BudgetPeriod,
    LedgerSnapshot,
    Posting,
    Transaction,
    split_description,
)
from ledgerlens.models.reports import (
    Asset,
    AssetReport,
    BudgetComparison,
    BudgetOverview,
    BudgetSummary,
    ExpenseOptions,
    IncomeEntry,
    MonthlySeriesPoint,
    MonthOption,
    ReportingContext,
    TrendEntry,
    TrendSeries,
)
from ledgerlens.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Budget",
    "BudgetPeriod",
    "LedgerSnapshot",
    "Posting",
    "Transaction",
    "split_description",
    # Report models
    "Asset",
    "AssetReport",
    "BudgetComparison",
    "BudgetOverview",
    "BudgetSummary",
    "ExpenseOptions",
    "IncomeEntry",
    "MonthlySeriesPoint",
    "MonthOption",
    "ReportingContext",
    "TrendEntry",
    "TrendSeries",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
