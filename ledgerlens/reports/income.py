"""
Income Aggregation

Income accounts are credited, so their ledger amounts are usually
negative. Reports show income as positive numbers.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerlens.ledger.patterns import INCOME_ACCOUNT_PATTERN, JOINT_INCOME_PREFIX, JOINT_PREFIX
from ledgerlens.models.ledger import Posting, Transaction
from ledgerlens.models.reports import IncomeEntry
from ledgerlens.reports.categories import in_month, normalize_category_name, to_title_case


ZERO = Decimal("0")


def calculate_income_amount(posting: Posting, transaction: Transaction) -> Optional[Decimal]:
    """
    Positive income amount for a posting, or None if there is none.

    - negative amounts become their absolute value
    - positive amounts pass through
    - missing or zero amounts take the absolute sum of the other explicit
      amounts in the transaction
    """
    amount = posting.amount

    if amount is not None and amount < ZERO:
        return abs(amount)

    if amount is None or amount == ZERO:
        others = sum(
            (other.amount for other in transaction.postings
             if other is not posting and other.amount is not None),
            ZERO,
        )
        if others != ZERO:
            return abs(others)
        return None

    return amount


def process_income_transactions(
    transactions: Iterable[Transaction],
    filter_joint_only: bool = True,
) -> dict[str, Decimal]:
    """Positive income per normalized category."""
    income: dict[str, Decimal] = {}

    for transaction in transactions:
        for posting in transaction.postings:
            match = INCOME_ACCOUNT_PATTERN.search(posting.account)
            if not match:
                continue
            if filter_joint_only and not posting.account.startswith(JOINT_PREFIX):
                continue

            amount = calculate_income_amount(posting, transaction)
            if amount is not None and amount > ZERO:
                category = normalize_category_name(match.group(1))
                income[category] = income.get(category, ZERO) + amount

    return income


def calculate_monthly_income(
    target: date,
    transactions: Iterable[Transaction],
    filter_joint_only: bool = True,
) -> dict[str, Decimal]:
    """process_income_transactions() over the target month only."""
    monthly = [t for t in transactions if in_month(t, target)]
    return process_income_transactions(monthly, filter_joint_only)


def list_income_entries(transactions: Iterable[Transaction]) -> list[IncomeEntry]:
    """
    One row per joint income posting with a negative amount, newest first.

    The category is the third account segment, title-cased.
    """
    entries = []
    for transaction in transactions:
        for posting in transaction.postings:
            if not posting.account.startswith(JOINT_INCOME_PREFIX):
                continue
            if posting.amount is None or posting.amount >= ZERO:
                continue
            parts = posting.account.split(":")
            entries.append(IncomeEntry(
                date=transaction.date,
                description=transaction.description or "N/A",
                category=to_title_case(parts[2] if len(parts) > 2 and parts[2] else "Unknown"),
                amount=abs(posting.amount),
            ))

    entries.sort(key=lambda entry: entry.date, reverse=True)
    return entries


def income_breakdown(entries: Iterable[IncomeEntry]) -> list[tuple[str, Decimal]]:
    """(category, total) pairs, largest first."""
    totals: dict[str, Decimal] = {}
    for entry in entries:
        totals[entry.category] = totals.get(entry.category, ZERO) + entry.amount
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)
