"""
Reports Package

Pure aggregation functions over transaction slices, plus the async
LedgerReportService that feeds them from a repository.
"""

from ledgerlens.reports.assets import (
    ASSET_CATEGORIES,
    accumulate_asset_balances,
    asset_category,
    build_asset_report,
    categorize_assets,
    find_baseline,
    format_account_name,
    project_year_end,
    project_year_end_on,
)
from ledgerlens.reports.categories import (
    filter_transactions_by_month,
    get_budgeted_categories,
    get_unique_months,
    normalize_category_name,
    to_title_case,
)
from ledgerlens.reports.expenses import (
    calculate_monthly_expenses,
    compare_monthly_budgets,
    compare_yearly_budgets,
    process_expense_transactions,
    summarize_budgets,
)
from ledgerlens.reports.income import (
    calculate_income_amount,
    calculate_monthly_income,
    income_breakdown,
    list_income_entries,
    process_income_transactions,
)
from ledgerlens.reports.service import LedgerReportService
from ledgerlens.reports.text import common_display_prefix, strip_common_prefix
from ledgerlens.reports.trends import (
    aggregate_data_by_month,
    apply_cumulative,
    build_trend_series,
    compute_trends,
)

__all__ = [
    # Service
    "LedgerReportService",
    # Categories
    "filter_transactions_by_month",
    "get_budgeted_categories",
    "get_unique_months",
    "normalize_category_name",
    "to_title_case",
    # Expenses and budgets
    "calculate_monthly_expenses",
    "compare_monthly_budgets",
    "compare_yearly_budgets",
    "process_expense_transactions",
    "summarize_budgets",
    # Income
    "calculate_income_amount",
    "calculate_monthly_income",
    "income_breakdown",
    "list_income_entries",
    "process_income_transactions",
    # Trends
    "aggregate_data_by_month",
    "apply_cumulative",
    "build_trend_series",
    "compute_trends",
    # Assets
    "ASSET_CATEGORIES",
    "accumulate_asset_balances",
    "asset_category",
    "build_asset_report",
    "categorize_assets",
    "common_display_prefix",
    "find_baseline",
    "format_account_name",
    "project_year_end",
    "project_year_end_on",
    "strip_common_prefix",
]
