"""
Asset Report

Walks every asset posting in the ledger to build current balances,
groups them into display categories, and projects the year-end total.

DESIGN DECISION: Accounts that match no category are left out of the
report and its total, and logged as asset_uncategorized audit events.
They are never raised; a new account in the ledger must not break the page.
"""

import calendar
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from ledgerlens.audit import AuditLogger
from ledgerlens.ledger.classify import resolve_amount
from ledgerlens.ledger.patterns import OPENING_BALANCES_MARKER
from ledgerlens.models.ledger import Transaction
from ledgerlens.models.reports import Asset, AssetReport
from ledgerlens.reports.categories import to_title_case
from ledgerlens.reports.text import strip_common_prefix


ZERO = Decimal("0")

# Category title -> account prefixes, checked in order; first match wins.
ASSET_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Savings": ("assets:bank:savings", "assets:savings", "assets:liquid", "assets:cash"),
    "Investments": ("assets:brokerage", "assets:investments", "assets:stocks", "assets:crypto", "assets:retirement"),
    "Treasury Bonds": ("assets:bonds", "assets:fixed:bonds", "assets:treasury"),
    "Possessions": ("assets:realestate", "assets:home", "assets:car", "assets:vehicle", "assets:valuables"),
}


def asset_subpath(account: str) -> Optional[str]:
    """
    The part of an account path from its `assets` segment on.

    joint:assets:savings:ally -> assets:savings:ally
    None when the path has no assets segment with something after it.
    """
    parts = account.split(":")
    for index, part in enumerate(parts[:-1]):
        if part == "assets":
            return ":".join(parts[index:])
    return None


def accumulate_asset_balances(
    transactions: Iterable[Transaction],
    before: Optional[date] = None,
    on_or_before: Optional[date] = None,
) -> dict[str, Decimal]:
    """
    Balance per full asset account path.

    Implicit amounts are resolved so elided asset legs still count.
    before/on_or_before restrict the window by transaction date.
    """
    balances: dict[str, Decimal] = {}
    for transaction in transactions:
        if before is not None and transaction.date >= before:
            continue
        if on_or_before is not None and transaction.date > on_or_before:
            continue
        for posting in transaction.postings:
            if asset_subpath(posting.account) is None:
                continue
            amount = resolve_amount(posting, transaction)
            balances[posting.account] = balances.get(posting.account, ZERO) + amount
    return balances


def asset_category(account: str, categories: Mapping[str, Sequence[str]]) -> Optional[str]:
    """Title of the first category whose prefixes match the account, or None."""
    subpath = asset_subpath(account)
    if subpath is None:
        return None
    return next(
        (title for title, keywords in categories.items()
         if any(subpath.startswith(keyword) for keyword in keywords)),
        None,
    )


def _categorized_total(balances: Mapping[str, Decimal], categories: Mapping[str, Sequence[str]]) -> Decimal:
    """Sum of positive balances on categorized accounts, the same set the report total covers."""
    return sum(
        (balance for account, balance in balances.items()
         if balance > ZERO and asset_category(account, categories) is not None),
        ZERO,
    )


def find_baseline(
    transactions: Sequence[Transaction],
    audit_logger: Optional[AuditLogger] = None,
    categories: Optional[Mapping[str, Sequence[str]]] = None,
) -> tuple[Decimal, Optional[date]]:
    """
    Asset total the year-to-date change is measured from.

    Uses the latest transaction described as "opening balances": the sum of
    positive categorized asset balances as of its date. Without one, falls
    back to those balances accumulated before January 1 of the latest year
    in the ledger. Uncategorized accounts are left out, as they are from
    the report total.

    Returns (baseline, baseline_date).
    """
    if not transactions:
        return ZERO, None
    categories = categories if categories is not None else ASSET_CATEGORIES

    openings = [t for t in transactions if OPENING_BALANCES_MARKER in t.description.lower()]
    if openings:
        opening = max(openings, key=lambda t: t.date)
        balances = accumulate_asset_balances(transactions, on_or_before=opening.date)
        return _categorized_total(balances, categories), opening.date

    latest_year = max(t.date.year for t in transactions)
    cutoff = date(latest_year, 1, 1)
    baseline = _categorized_total(accumulate_asset_balances(transactions, before=cutoff), categories)
    (audit_logger or AuditLogger()).log_baseline_fallback(latest_year, baseline)
    return baseline, cutoff


def format_account_name(account: str) -> str:
    """
    Human-friendly name from an account path.

    assets:savings:ally -> Savings Ally
    assets:bank:ally    -> Assets Bank Ally (short or 'bank' parents pull in one more level)
    """
    parts = account.split(":")
    name = " ".join(parts[-2:]) if len(parts) > 1 else parts[-1]
    if len(parts) > 2 and (len(parts[-2]) < 4 or parts[-2] == "bank"):
        name = " ".join(parts[-3:])
    return to_title_case(name.replace("_", " "))


def categorize_assets(
    balances: Mapping[str, Decimal],
    categories: Optional[Mapping[str, Sequence[str]]] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> tuple[dict[str, list[Asset]], list[str]]:
    """
    Group positive balances into display categories.

    Returns (categorized, uncategorized). Every configured category is
    present, possibly empty. Within a category assets are sorted by
    balance, largest first, and their shared name prefix is stripped.
    """
    categories = categories if categories is not None else ASSET_CATEGORIES
    audit_logger = audit_logger or AuditLogger()

    grouped: dict[str, list[tuple[str, Decimal]]] = {title: [] for title in categories}
    uncategorized: list[str] = []

    for account, balance in balances.items():
        if balance <= ZERO:
            continue
        if asset_subpath(account) is None:
            continue
        title = asset_category(account, categories)
        if title is None:
            audit_logger.log_asset_uncategorized(account, balance)
            uncategorized.append(account)
            continue
        grouped[title].append((account, balance))

    categorized: dict[str, list[Asset]] = {}
    for title, members in grouped.items():
        members.sort(key=lambda member: member[1], reverse=True)
        names = strip_common_prefix([format_account_name(asset_subpath(account)) for account, _ in members])
        categorized[title] = [
            Asset(account_name=name, full_account_path=account, balance=balance)
            for name, (account, balance) in zip(names, members)
        ]

    return categorized, uncategorized


def project_year_end(
    total: Decimal,
    baseline: Decimal,
    days_elapsed: int,
    days_in_year: int = 365,
) -> Optional[Decimal]:
    """
    Linear year-end projection.

    total + daily_rate * remaining_days, where
    daily_rate = (total - baseline) / days_elapsed.
    None when no days have elapsed.
    """
    if days_elapsed <= 0:
        return None
    daily_rate = (total - baseline) / days_elapsed
    return total + daily_rate * (days_in_year - days_elapsed)


def project_year_end_on(total: Decimal, baseline: Decimal, as_of: date) -> Optional[Decimal]:
    """project_year_end() with day counts taken from a calendar date."""
    days_elapsed = (as_of - date(as_of.year, 1, 1)).days
    days_in_year = 366 if calendar.isleap(as_of.year) else 365
    return project_year_end(total, baseline, days_elapsed, days_in_year)


def build_asset_report(
    transactions: Iterable[Transaction],
    as_of: Optional[date] = None,
    categories: Optional[Mapping[str, Sequence[str]]] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> AssetReport:
    """
    Full asset report.

    Args:
        transactions: Entire ledger history
        as_of: Date the projection is made on (default: today)
        categories: Category table (default: ASSET_CATEGORIES)
        audit_logger: Receives uncategorized-asset and baseline events
    """
    transactions = list(transactions)
    audit_logger = audit_logger or AuditLogger()
    as_of = as_of or date.today()

    balances = accumulate_asset_balances(transactions)
    categorized, uncategorized = categorize_assets(balances, categories, audit_logger)
    total = sum((asset.balance for assets in categorized.values() for asset in assets), ZERO)
    baseline, baseline_date = find_baseline(transactions, audit_logger, categories)

    return AssetReport(
        categories=categorized,
        uncategorized=uncategorized,
        total=total,
        baseline=baseline,
        baseline_date=baseline_date,
        projected_year_end=project_year_end_on(total, baseline, as_of),
    )
