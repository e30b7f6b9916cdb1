"""
Category and month helpers shared by every report.
"""

import re
from datetime import date
from typing import Iterable, Optional

from ledgerlens.ledger.classify import formatted_category
from ledgerlens.models.ledger import Budget, BudgetPeriod, Transaction
from ledgerlens.models.reports import MonthOption


_WORD_START = re.compile(r"\b(\w)")


def to_title_case(text: str) -> str:
    """'food & dining' -> 'Food & Dining'"""
    if not text:
        return ""
    return _WORD_START.sub(lambda m: m.group(1).upper(), text.lower())


def normalize_category_name(category: str) -> str:
    """
    Lower-case a category and fold every travel sub-category into `travel`.

    Idempotent: normalizing twice gives the same result.
    """
    normalized = category.lower()
    if normalized.startswith("travel"):
        return "travel"
    return normalized


def month_key(when: date) -> str:
    """YYYY-MM"""
    return f"{when.year:04d}-{when.month:02d}"


def in_month(transaction: Transaction, month: date) -> bool:
    return transaction.date.year == month.year and transaction.date.month == month.month


def filter_transactions_by_month(
    transactions: Iterable[Transaction],
    selected_months: Iterable[str],
) -> list[Transaction]:
    """
    Keep transactions whose YYYY-MM is in selected_months.

    An empty selection keeps everything.
    """
    selected = set(selected_months)
    transactions = list(transactions)
    if not selected:
        return transactions
    return [t for t in transactions if month_key(t.date) in selected]


def get_budgeted_categories(budgets: Iterable[Budget]) -> frozenset[str]:
    """Normalized names of every category with a monthly or yearly budget."""
    return frozenset(
        normalize_category_name(formatted_category(budget))
        for budget in budgets
        if budget.period in (BudgetPeriod.MONTHLY, BudgetPeriod.YEARLY)
    )


def get_unique_months(
    transactions: Iterable[Transaction],
    account_filter: Optional[str] = None,
) -> list[MonthOption]:
    """
    Months that have transactions, newest first.

    With account_filter, only months where some posting's account contains
    that text count.
    """
    months: set[str] = set()
    for transaction in transactions:
        if account_filter and not any(account_filter in p.account for p in transaction.postings):
            continue
        months.add(month_key(transaction.date))

    options = []
    for value in sorted(months, reverse=True):
        year, month = value.split("-")
        label = date(int(year), int(month), 1).strftime("%B %Y")
        options.append(MonthOption(value=value, label=label))
    return options
