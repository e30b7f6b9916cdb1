"""
Tests for ledgerlens models

Test strategy:
1. Unit tests for individual components (models, parser, reports)
2. Integration tests for the repository and service (in-memory storage)
3. No real network calls in tests (httpx.MockTransport)
"""

import math
from datetime import date

import pytest
from decimal import Decimal
from pydantic import ValidationError

from ledgerlens.models.ledger import (
    Budget,
    BudgetPeriod,
    LedgerSnapshot,
    Posting,
    Transaction,
    split_description,
)
from ledgerlens.models.reports import (
    AssetReport,
    BudgetComparison,
    BudgetSummary,
    ReportingContext,
    TrendEntry,
)
from ledgerlens.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestLedgerModels:
    """Tests for ledger Pydantic models."""

    def test_posting_creation(self):
        """Test Posting model creation."""
        posting = Posting(account="joint:expenses:dining", amount=Decimal("15.00"), currency="USD")
        assert posting.account == "joint:expenses:dining"
        assert posting.amount == Decimal("15.00")

    def test_posting_amount_is_optional(self):
        """Test that an implicit posting has no amount."""
        posting = Posting(account="joint:assets:checking")
        assert posting.amount is None
        assert posting.currency is None

    def test_posting_rejects_empty_account(self):
        """Test that an account path is required."""
        with pytest.raises(ValidationError):
            Posting(account="")

    def test_transaction_is_frozen(self):
        """Test that parsed transactions cannot be changed."""
        transaction = Transaction(date=date(2024, 1, 5), description="Coffee shop")
        with pytest.raises(ValidationError):
            transaction.description = "Tea shop"

    def test_transaction_equality_is_structural(self):
        """Test that two transactions with the same data compare equal."""
        postings = (Posting(account="a:b", amount=Decimal("1")),)
        first = Transaction(date=date(2024, 1, 5), description="x", postings=postings)
        second = Transaction(date=date(2024, 1, 5), description="x", postings=postings)
        assert first == second

    def test_budget_period_values(self):
        """Test budget period string values."""
        assert BudgetPeriod.MONTHLY.value == "monthly"
        assert BudgetPeriod("yearly") is BudgetPeriod.YEARLY

    def test_snapshot_defaults(self):
        """Test an empty snapshot."""
        snapshot = LedgerSnapshot()
        assert snapshot.transactions == ()
        assert snapshot.budgets == ()
        assert snapshot.last_modified is None


class TestSplitDescription:
    """Tests for the tag | text description convention."""

    def test_split_with_tag(self):
        assert split_description("Payroll | January salary") == ("Payroll", "January salary")

    def test_split_without_tag(self):
        assert split_description("Coffee shop") == (None, "Coffee shop")

    def test_split_with_empty_tag(self):
        assert split_description(" | Refund") == (None, "Refund")


class TestReportModels:
    """Tests for report models and their derived properties."""

    def test_budget_comparison_remaining_and_percent(self):
        """Test remaining and percent used."""
        comparison = BudgetComparison(name="dining", spent=Decimal("150"), budget=Decimal("300"))
        assert comparison.remaining == Decimal("150")
        assert comparison.percent_used == 50.0

    def test_budget_comparison_zero_budget(self):
        """Test that a zero budget reports 0% rather than dividing by zero."""
        comparison = BudgetComparison(name="misc", spent=Decimal("10"))
        assert comparison.percent_used == 0.0

    def test_budget_summary(self):
        summary = BudgetSummary(total_budget=Decimal("2400"), total_spent=Decimal("1555"))
        assert summary.remaining == Decimal("845")

    def test_trend_entry_new_category(self):
        """Test that an infinite change marks a new category."""
        entry = TrendEntry(
            category="books",
            current=Decimal("50"),
            previous_average=Decimal("0"),
            percent_change=math.inf,
        )
        assert entry.is_new is True
        assert entry.change == Decimal("50")

    def test_asset_report_year_to_date_change(self):
        report = AssetReport(total=Decimal("19000"), baseline=Decimal("14000"))
        assert report.year_to_date_change == Decimal("5000")

    def test_reporting_context_year_defaults_to_month(self):
        """Test that the reporting year follows the month unless given."""
        assert ReportingContext(month=date(2024, 3, 15)).target_year == 2024
        assert ReportingContext(month=date(2024, 3, 15), year=2023).target_year == 2023

    def test_reporting_context_rejects_bad_year(self):
        with pytest.raises(ValidationError):
            ReportingContext(year=12)

    def test_reporting_context_expense_options(self):
        """Test that filters carry over to ExpenseOptions."""
        ctx = ReportingContext(exclude_rent=False, budgeted_categories_only=True)
        options = ctx.expense_options(frozenset({"dining"}))
        assert options.exclude_rent is False
        assert options.filter_joint_only is True
        assert options.budgeted_categories == frozenset({"dining"})


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.LEDGER_PARSED,
            description="Parsed ledger",
        )
        assert event.event_type == AuditEventType.LEDGER_PARSED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.CACHE_REFRESHED,
            description="Ledger snapshot replaced",
            details={"replaced_existing": True},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "cache_refreshed"
        assert log_dict["details"]["replaced_existing"] is True

    def test_long_description_is_truncated(self):
        """Test that an oversized description is clipped, not rejected."""
        event = AuditEvent(event_type=AuditEventType.CACHE_HIT, description="x" * 600)
        assert len(event.description) == 500
        assert event.description.endswith("...")

    def test_audit_event_builder_fetch_failed(self):
        """Test AuditEventBuilder.ledger_fetch_failed."""
        event = AuditEventBuilder.ledger_fetch_failed(ConnectionError("server down"))
        assert event.event_type == AuditEventType.LEDGER_FETCH_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "server down"
        assert event.details["error_type"] == "ConnectionError"

    def test_audit_event_builder_asset_uncategorized(self):
        """Test AuditEventBuilder.asset_uncategorized."""
        event = AuditEventBuilder.asset_uncategorized("joint:assets:misc:jar", "50.00")
        assert event.severity == AuditSeverity.WARNING
        assert event.entity_name == "joint:assets:misc:jar"
        assert event.details["balance"] == "50.00"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
