"""
Report Models for ledgerlens

Shapes returned by the aggregation engine. Category-keyed sums are plain
dict[str, Decimal]; anything with more than one number gets a model here.
"""

import datetime as dt
import math
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExpenseOptions(BaseModel):
    """Filters applied while summing expense postings."""
    model_config = ConfigDict(frozen=True)

    filter_joint_only: bool = Field(
        default=True,
        description="Only count accounts prefixed joint:"
    )
    exclude_rent: bool = Field(
        default=True,
        description="Skip accounts ending in :rent"
    )
    budgeted_categories_only: bool = Field(
        default=False,
        description="Only count categories present in budgeted_categories"
    )
    budgeted_categories: frozenset[str] = Field(
        default_factory=frozenset,
        description="Normalized category names that have a budget"
    )


class BudgetComparison(BaseModel):
    """Spent vs budgeted for one category."""
    model_config = ConfigDict(frozen=True)

    name: str
    spent: Decimal = Decimal("0")
    budget: Decimal = Decimal("0")

    @property
    def remaining(self) -> Decimal:
        return self.budget - self.spent

    @property
    def percent_used(self) -> float:
        if self.budget <= 0:
            return 0.0
        return float(self.spent / self.budget * 100)


class BudgetSummary(BaseModel):
    """Totals across a list of budget comparisons."""
    model_config = ConfigDict(frozen=True)

    total_budget: Decimal = Decimal("0")
    total_spent: Decimal = Decimal("0")

    @property
    def remaining(self) -> Decimal:
        return self.total_budget - self.total_spent

    @property
    def percent_used(self) -> float:
        if self.total_budget <= 0:
            return 0.0
        return float(self.total_spent / self.total_budget * 100)


class BudgetOverview(BaseModel):
    """Monthly and yearly budget comparisons for one reporting period."""
    model_config = ConfigDict(frozen=True)

    monthly: list[BudgetComparison] = Field(default_factory=list)
    yearly: list[BudgetComparison] = Field(default_factory=list)
    monthly_summary: BudgetSummary = Field(default_factory=BudgetSummary)
    yearly_summary: BudgetSummary = Field(default_factory=BudgetSummary)


class TrendEntry(BaseModel):
    """
    Current month spend compared with the average of prior months.

    percent_change is math.inf for a category with no prior spend.
    """
    model_config = ConfigDict(frozen=True)

    category: str
    current: Decimal
    previous_average: Decimal
    percent_change: float

    @property
    def change(self) -> Decimal:
        return self.current - self.previous_average

    @property
    def is_new(self) -> bool:
        return math.isinf(self.percent_change)


class Asset(BaseModel):
    """An asset account with a positive balance."""
    model_config = ConfigDict(frozen=True)

    account_name: str = Field(..., description="Display name after prefix stripping")
    full_account_path: str
    balance: Decimal


class AssetReport(BaseModel):
    """Categorized asset balances with year-to-date figures."""
    model_config = ConfigDict(frozen=True)

    categories: dict[str, list[Asset]] = Field(default_factory=dict)
    uncategorized: list[str] = Field(
        default_factory=list,
        description="Accounts with a positive balance but no category"
    )
    total: Decimal = Decimal("0")
    baseline: Decimal = Decimal("0")
    baseline_date: Optional[dt.date] = None
    projected_year_end: Optional[Decimal] = None

    @property
    def year_to_date_change(self) -> Decimal:
        return self.total - self.baseline


class MonthOption(BaseModel):
    """A month that has data, for month pickers."""
    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="YYYY-MM")
    label: str = Field(..., description="e.g. January 2024")


class MonthlySeriesPoint(BaseModel):
    """One month of a category series."""
    model_config = ConfigDict(frozen=True)

    month: str = Field(..., description="Short label, e.g. Jan or Jan 24")
    values: dict[str, Decimal] = Field(default_factory=dict)


class TrendSeries(BaseModel):
    """Continuous monthly income and expense series across years."""
    model_config = ConfigDict(frozen=True)

    income: list[MonthlySeriesPoint] = Field(default_factory=list)
    expenses: list[MonthlySeriesPoint] = Field(default_factory=list)
    income_keys: list[str] = Field(default_factory=list)
    expense_keys: list[str] = Field(default_factory=list)


class IncomeEntry(BaseModel):
    """One income posting, ready for a table row."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    description: str
    category: str
    amount: Decimal


class ReportingContext(BaseModel):
    """
    What the caller wants to see.

    month is any day inside the target month; year defaults to month.year.
    """
    model_config = ConfigDict(frozen=True)

    month: dt.date = Field(default_factory=dt.date.today)
    year: Optional[int] = Field(default=None, ge=1900, le=9999)
    filter_joint_only: bool = True
    exclude_rent: bool = True
    budgeted_categories_only: bool = False

    @property
    def target_year(self) -> int:
        return self.year if self.year is not None else self.month.year

    def expense_options(self, budgeted_categories: frozenset[str] = frozenset()) -> ExpenseOptions:
        return ExpenseOptions(
            filter_joint_only=self.filter_joint_only,
            exclude_rent=self.exclude_rent,
            budgeted_categories_only=self.budgeted_categories_only,
            budgeted_categories=budgeted_categories,
        )
