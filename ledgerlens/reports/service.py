"""
Report Service for ledgerlens

Ties the repository to the aggregation functions and defines the
end-to-end flow every report follows:

    context -> snapshot (cached) -> slice by period -> aggregate -> model

DESIGN DECISION: The service owns no ledger state. Each call asks the
repository for the current snapshot and works on that one snapshot only,
so a refresh in the middle of a report never mixes two versions of the file.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerlens.audit import AuditLogger
from ledgerlens.models.ledger import LedgerSnapshot
from ledgerlens.models.reports import (
    AssetReport,
    BudgetOverview,
    IncomeEntry,
    MonthOption,
    ReportingContext,
    TrendEntry,
    TrendSeries,
)
from ledgerlens.reports.assets import build_asset_report
from ledgerlens.reports.categories import get_budgeted_categories, get_unique_months
from ledgerlens.reports.expenses import (
    calculate_monthly_expenses,
    compare_monthly_budgets,
    compare_yearly_budgets,
    summarize_budgets,
)
from ledgerlens.reports.income import calculate_monthly_income, list_income_entries
from ledgerlens.reports.trends import build_trend_series, compute_trends
from ledgerlens.repository import LedgerRepository


class LedgerReportService:
    """
    Produces every report from one repository.

    All methods are async because the first call may have to fetch.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._repository = repository
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def repository(self) -> LedgerRepository:
        return self._repository

    async def _snapshot(self) -> LedgerSnapshot:
        return await self._repository.get_snapshot()

    async def expenses(self, ctx: ReportingContext) -> dict[str, Decimal]:
        """Expense totals per category for ctx.month, filtered by ctx."""
        snapshot = await self._snapshot()
        options = ctx.expense_options(get_budgeted_categories(snapshot.budgets))
        return calculate_monthly_expenses(ctx.month, snapshot.transactions, options)

    async def income(self, ctx: ReportingContext) -> dict[str, Decimal]:
        """Income totals per category for ctx.month."""
        snapshot = await self._snapshot()
        return calculate_monthly_income(ctx.month, snapshot.transactions, ctx.filter_joint_only)

    async def income_entries(self, ctx: Optional[ReportingContext] = None) -> list[IncomeEntry]:
        """
        Income rows, newest first.

        Args:
            ctx: When given, only rows in ctx.month
        """
        snapshot = await self._snapshot()
        entries = list_income_entries(snapshot.transactions)
        if ctx is None:
            return entries
        return [
            entry for entry in entries
            if entry.date.year == ctx.month.year and entry.date.month == ctx.month.month
        ]

    async def budget_overview(self, ctx: ReportingContext) -> BudgetOverview:
        """Monthly budgets for ctx.month and yearly budgets for ctx.target_year."""
        snapshot = await self._snapshot()
        monthly = compare_monthly_budgets(ctx.month, snapshot.transactions, snapshot.budgets)
        yearly = compare_yearly_budgets(ctx.target_year, snapshot.transactions, snapshot.budgets)
        return BudgetOverview(
            monthly=monthly,
            yearly=yearly,
            monthly_summary=summarize_budgets(monthly),
            yearly_summary=summarize_budgets(yearly),
        )

    async def trends(self, ctx: ReportingContext) -> list[TrendEntry]:
        """Categories whose spend in ctx.month moved against earlier months."""
        snapshot = await self._snapshot()
        options = ctx.expense_options(get_budgeted_categories(snapshot.budgets))
        return compute_trends(snapshot.transactions, ctx.month, options)

    async def trend_series(self, years: Iterable[int], cumulative: bool = False) -> TrendSeries:
        snapshot = await self._snapshot()
        return build_trend_series(snapshot.transactions, snapshot.budgets, years, cumulative=cumulative)

    async def assets(self, as_of: Optional[date] = None) -> AssetReport:
        """Categorized asset balances with baseline and year-end projection."""
        snapshot = await self._snapshot()
        return build_asset_report(snapshot.transactions, as_of=as_of, audit_logger=self._audit_logger)

    async def months(self, account_filter: Optional[str] = None) -> list[MonthOption]:
        """Months that have data, newest first."""
        snapshot = await self._snapshot()
        return get_unique_months(snapshot.transactions, account_filter)
