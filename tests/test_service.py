"""
Tests for the report service, end to end over in-memory storage.
"""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from ledgerlens.models.reports import ReportingContext
from ledgerlens.reports import LedgerReportService
from ledgerlens.repository import LedgerRepository
from ledgerlens.services.storage import InMemoryLedgerStorage


def run_service(ledger, call, audit_logger=None):
    """Build a service over ledger and await call(service)."""

    async def main():
        repository = LedgerRepository(InMemoryLedgerStorage(ledger), audit_logger=audit_logger)
        return await call(LedgerReportService(repository, audit_logger=audit_logger))

    return asyncio.run(main())


class TestLedgerReportService:
    """Tests for report orchestration."""

    def test_expenses(self, sample_ledger):
        ctx = ReportingContext(month=date(2024, 1, 20))
        assert run_service(sample_ledger, lambda s: s.expenses(ctx)) == {
            "dining": Decimal("15.00"),
            "dining:restaurants": Decimal("40.00"),
        }

    def test_expenses_budgeted_only(self, sample_ledger):
        ctx = ReportingContext(month=date(2024, 1, 20), budgeted_categories_only=True, exclude_rent=False)
        assert run_service(sample_ledger, lambda s: s.expenses(ctx)) == {
            "dining": Decimal("15.00"),
            "rent": Decimal("1500.00"),
        }

    def test_income(self, sample_ledger):
        ctx = ReportingContext(month=date(2024, 1, 1))
        assert run_service(sample_ledger, lambda s: s.income(ctx)) == {"salary": Decimal("5000.00")}

    def test_income_entries_for_month(self, sample_ledger):
        assert run_service(sample_ledger, lambda s: s.income_entries(ReportingContext(month=date(2024, 2, 1)))) == []
        (entry,) = run_service(sample_ledger, lambda s: s.income_entries())
        assert entry.category == "Salary"

    def test_budget_overview(self, sample_ledger):
        ctx = ReportingContext(month=date(2024, 1, 1))
        overview = run_service(sample_ledger, lambda s: s.budget_overview(ctx))
        assert [c.name for c in overview.monthly] == ["dining", "groceries", "rent"]
        assert overview.monthly_summary.total_spent == Decimal("1555.00")
        assert [(c.name, c.spent) for c in overview.yearly] == [("travel", Decimal("350.00"))]

    def test_budget_overview_other_year(self, sample_ledger):
        ctx = ReportingContext(month=date(2024, 1, 1), year=2023)
        overview = run_service(sample_ledger, lambda s: s.budget_overview(ctx))
        assert overview.yearly[0].spent == Decimal("0")

    def test_trends(self, sample_ledger):
        ctx = ReportingContext(month=date(2024, 2, 1))
        trends = run_service(sample_ledger, lambda s: s.trends(ctx))
        assert {t.category for t in trends} == {"travel", "groceries", "dining", "dining:restaurants"}

    def test_trend_series(self, sample_ledger):
        series = run_service(sample_ledger, lambda s: s.trend_series([2024]))
        assert len(series.expenses) == 12

    def test_assets(self, sample_ledger, audit_logger):
        report = run_service(sample_ledger, lambda s: s.assets(as_of=date(2024, 4, 10)), audit_logger)
        assert report.total == Decimal("19000.00")
        assert report.baseline_date == date(2023, 12, 20)

    def test_months(self, sample_ledger):
        months = run_service(sample_ledger, lambda s: s.months())
        assert [m.label for m in months] == ["February 2024", "January 2024", "December 2023"]

    def test_reports_share_one_fetch(self, sample_ledger):
        storage = InMemoryLedgerStorage(sample_ledger)

        async def main():
            service = LedgerReportService(LedgerRepository(storage))
            ctx = ReportingContext(month=date(2024, 1, 1))
            await service.expenses(ctx)
            await service.budget_overview(ctx)
            await service.assets()

        asyncio.run(main())
        assert storage.fetch_count == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
