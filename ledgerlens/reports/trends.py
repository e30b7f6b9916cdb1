"""
Trend Computation

Two views over spending history:

1. compute_trends() - which categories moved this month compared with
   the average of every earlier month that has data
2. build_trend_series() - continuous month-by-month income and expense
   series across one or more years, for charts
"""

import calendar
import math
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from ledgerlens.config import get_settings
from ledgerlens.models.ledger import Budget, Transaction
from ledgerlens.models.reports import ExpenseOptions, MonthlySeriesPoint, TrendEntry, TrendSeries
from ledgerlens.reports.categories import get_budgeted_categories
from ledgerlens.reports.expenses import process_expense_transactions
from ledgerlens.reports.income import process_income_transactions


ZERO = Decimal("0")

TOTAL_INCOME_KEY = "Total Income"
TOTAL_EXPENSES_KEY = "Total Expenses"

MonthlyProcessor = Callable[[list[Transaction], int], dict[str, Decimal]]


def _group_by_month(transactions: Iterable[Transaction]) -> dict[tuple[int, int], list[Transaction]]:
    grouped: dict[tuple[int, int], list[Transaction]] = {}
    for transaction in transactions:
        grouped.setdefault((transaction.date.year, transaction.date.month), []).append(transaction)
    return grouped


def _trend_sort_key(entry: TrendEntry) -> tuple:
    if entry.is_new:
        return (0, -entry.current)
    return (1, -abs(entry.percent_change))


def compute_trends(
    transactions: Iterable[Transaction],
    month: date,
    options: Optional[ExpenseOptions] = None,
    threshold: Optional[float] = None,
) -> list[TrendEntry]:
    """
    Categories whose spend this month moved noticeably.

    For every category seen in the target month or any earlier month, the
    previous average is total earlier spend divided by the number of
    distinct earlier months that have any transaction. An entry is emitted
    when:
    - the previous average is positive and the change exceeds threshold
    - the previous average is positive and nothing was spent this month
    - there was no previous spend and something was spent this month
      (percent_change is infinite)

    New categories come first, largest spend first; the rest follow by
    largest absolute percent change.
    """
    if threshold is None:
        threshold = get_settings().reports.trend_threshold
    options = options or ExpenseOptions()

    by_month = _group_by_month(transactions)
    current_key = (month.year, month.month)
    prior_keys = sorted(key for key in by_month if key < current_key)

    current_spend = process_expense_transactions(by_month.get(current_key, []), options)
    prior_totals: dict[str, Decimal] = {}
    for key in prior_keys:
        for category, amount in process_expense_transactions(by_month[key], options).items():
            prior_totals[category] = prior_totals.get(category, ZERO) + amount

    entries = []
    for category in sorted(set(current_spend) | set(prior_totals)):
        current = current_spend.get(category, ZERO)
        average = prior_totals.get(category, ZERO) / len(prior_keys) if prior_keys else ZERO

        if average > ZERO:
            change = float((current - average) / average)
            if abs(change) > threshold or current == ZERO:
                entries.append(TrendEntry(
                    category=category,
                    current=current,
                    previous_average=average,
                    percent_change=change * 100,
                ))
        elif average == ZERO and current > ZERO:
            entries.append(TrendEntry(
                category=category,
                current=current,
                previous_average=ZERO,
                percent_change=math.inf,
            ))

    return sorted(entries, key=_trend_sort_key)


# =============================================================================
# MONTHLY SERIES
# =============================================================================

def aggregate_data_by_month(
    transactions: Iterable[Transaction],
    year: int,
    processor: MonthlyProcessor,
) -> tuple[list[MonthlySeriesPoint], list[str]]:
    """
    Run processor over each month of a year.

    processor receives the year's transactions and a month number (1-12).
    Returns twelve points (every category filled, 0 where absent) and the
    sorted category names.
    """
    year_transactions = [t for t in transactions if t.date.year == year]
    monthly: dict[int, dict[str, Decimal]] = {}
    categories: set[str] = set()

    for month in range(1, 13):
        monthly[month] = processor(year_transactions, month)
        categories.update(monthly[month])

    points = [
        MonthlySeriesPoint(
            month=calendar.month_abbr[month],
            values={category: monthly[month].get(category, ZERO) for category in categories},
        )
        for month in range(1, 13)
    ]
    return points, sorted(categories)


def apply_cumulative(points: list[MonthlySeriesPoint], keys: Iterable[str]) -> list[MonthlySeriesPoint]:
    """Running totals of keys across points."""
    keys = list(keys)
    running = {key: ZERO for key in keys}
    cumulative = []
    for point in points:
        for key in keys:
            running[key] += point.values.get(key, ZERO)
        cumulative.append(MonthlySeriesPoint(month=point.month, values=dict(running)))
    return cumulative


def _with_total(label: str, values: dict[str, Decimal], keys: list[str], total_key: str) -> MonthlySeriesPoint:
    row = {key: values.get(key, ZERO) for key in keys}
    row[total_key] = sum(row.values(), ZERO)
    return MonthlySeriesPoint(month=label, values=row)


def build_trend_series(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    years: Iterable[int],
    cumulative: bool = False,
    top_income: Optional[int] = None,
) -> TrendSeries:
    """
    Continuous monthly income and expense series across the given years.

    Income keeps the top categories by average monthly income over all
    selected months; expenses cover budgeted categories only (joint
    accounts, rent excluded). Each point carries a total.
    """
    if top_income is None:
        top_income = get_settings().reports.top_income_categories

    year_list = sorted(set(years))
    if not year_list:
        return TrendSeries()

    transactions = list(transactions)
    expense_options = ExpenseOptions(
        filter_joint_only=True,
        exclude_rent=True,
        budgeted_categories_only=True,
        budgeted_categories=get_budgeted_categories(budgets),
    )
    by_month = _group_by_month(transactions)

    months: list[tuple[int, int, dict[str, Decimal], dict[str, Decimal]]] = []
    income_totals: dict[str, Decimal] = {}
    expense_categories: set[str] = set()

    for year in year_list:
        for month in range(1, 13):
            month_transactions = by_month.get((year, month), [])
            income = process_income_transactions(month_transactions, filter_joint_only=True)
            expenses = process_expense_transactions(month_transactions, expense_options)
            months.append((year, month, income, expenses))
            for category, amount in income.items():
                income_totals[category] = income_totals.get(category, ZERO) + amount
            expense_categories.update(expenses)

    selected_months = len(year_list) * 12
    averages = {category: total / selected_months for category, total in income_totals.items()}
    income_keys = [
        category for category, _ in
        sorted(averages.items(), key=lambda item: item[1], reverse=True)[:top_income]
    ]
    expense_keys = sorted(expense_categories)

    income_points = []
    expense_points = []
    for year, month, income, expenses in months:
        label = f"{calendar.month_abbr[month]} {year % 100:02d}"
        income_points.append(_with_total(label, income, income_keys, TOTAL_INCOME_KEY))
        expense_points.append(_with_total(label, expenses, expense_keys, TOTAL_EXPENSES_KEY))

    if cumulative:
        income_points = apply_cumulative(income_points, income_keys + [TOTAL_INCOME_KEY])
        expense_points = apply_cumulative(expense_points, expense_keys + [TOTAL_EXPENSES_KEY])

    return TrendSeries(
        income=income_points,
        expenses=expense_points,
        income_keys=income_keys,
        expense_keys=expense_keys,
    )
