"""
Ledger Repository

Owns one parsed snapshot of the ledger.

DESIGN DECISION: One fetch feeds both transactions and budgets.
Fetching twice (once per collection) could pair transactions from one
version of the file with budgets from another.

GUARANTEES:
- Concurrent first reads trigger exactly one fetch (asyncio.Lock single-flight)
- A refresh swaps the snapshot in one assignment; readers see old or new, never a mix
- A failed fetch propagates unchanged and leaves the cached snapshot intact
"""

import asyncio
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ledgerlens.audit import AuditLogger
from ledgerlens.budgets import BudgetMatcher
from ledgerlens.ledger.classify import category, effective_amount, is_joint_expense, is_joint_income
from ledgerlens.ledger.parser import LedgerParser
from ledgerlens.models.ledger import Budget, LedgerSnapshot, Transaction
from ledgerlens.services.storage import LedgerStorageInterface


ZERO = Decimal("0")


def _in_month(transaction: Transaction, month: date) -> bool:
    return transaction.date.year == month.year and transaction.date.month == month.month


def _add_category_paths(totals: dict[str, Decimal], category_path: str, amount: Decimal) -> None:
    """a:b:c adds to a, a:b and a:b:c."""
    parts = category_path.split(":")
    for index in range(len(parts)):
        key = ":".join(parts[:index + 1])
        totals[key] = totals.get(key, ZERO) + amount


class LedgerRepository:
    """
    Cached access to the ledger behind a storage collaborator.

    Build one per storage and pass it to whoever needs ledger data.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        parser: Optional[LedgerParser] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._parser = parser or LedgerParser()
        self._audit_logger = audit_logger or AuditLogger()
        self._snapshot: Optional[LedgerSnapshot] = None
        self._lock = asyncio.Lock()

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    async def _load(self, force_refresh: bool) -> LedgerSnapshot:
        self._audit_logger.log_fetch_started(force_refresh)
        try:
            content = await self._storage.fetch_ledger_content()
        except Exception as e:
            self._audit_logger.log_fetch_failed(e)
            raise

        last_modified = self._storage.last_modified
        self._audit_logger.log_fetch_completed(len(content), last_modified)

        snapshot = LedgerSnapshot(
            transactions=tuple(self._parser.parse(content)),
            budgets=tuple(self._parser.parse_budgets(content)),
            last_modified=last_modified,
        )
        self._audit_logger.log_ledger_parsed(len(snapshot.transactions), len(snapshot.budgets))
        return snapshot

    async def get_snapshot(self, force_refresh: bool = False) -> LedgerSnapshot:
        """
        The current snapshot, fetching it if needed.

        Args:
            force_refresh: Fetch and parse again even if cached
        """
        snapshot = self._snapshot
        if snapshot is not None and not force_refresh:
            self._audit_logger.log_cache_hit()
            return snapshot

        async with self._lock:
            # Another caller may have populated it while we waited
            if self._snapshot is not None and not force_refresh:
                return self._snapshot

            replaced = self._snapshot is not None
            new_snapshot = await self._load(force_refresh)
            self._snapshot = new_snapshot
            self._audit_logger.log_cache_refreshed(replaced)
            return new_snapshot

    async def get_transactions(self, force_refresh: bool = False) -> list[Transaction]:
        """Transactions in file order."""
        snapshot = await self.get_snapshot(force_refresh)
        return list(snapshot.transactions)

    async def get_budgets(self, force_refresh: bool = False) -> list[Budget]:
        snapshot = await self.get_snapshot(force_refresh)
        return list(snapshot.budgets)

    def get_last_modified(self) -> Optional[datetime]:
        """
        Last-modified marker of the cached snapshot.

        None until the first successful fetch.
        """
        snapshot = self._snapshot
        return snapshot.last_modified if snapshot is not None else None

    async def get_budget_for_category(self, category_name: str, is_yearly: bool = False) -> Decimal:
        """Budgeted amount for a category, 0 when none matches."""
        budgets = await self.get_budgets()
        return BudgetMatcher(budgets).resolve(category_name, is_yearly)

    # =========================================================================
    # Monthly reports
    # =========================================================================

    def _sum_joint_expenses(self, transactions: list[Transaction]) -> dict[str, Decimal]:
        expenses: dict[str, Decimal] = {}
        for transaction in transactions:
            for posting in transaction.postings:
                if not is_joint_expense(posting):
                    continue
                amount = effective_amount(posting, transaction)
                category_path = category(posting)
                if amount != ZERO and category_path:
                    _add_category_paths(expenses, category_path, amount)
        return expenses

    async def get_monthly_expenses(self, month: date) -> dict[str, Decimal]:
        """
        Joint expenses for one month, keyed by every category path prefix.

        Args:
            month: Any day in the target month
        """
        transactions = await self.get_transactions()
        return self._sum_joint_expenses([t for t in transactions if _in_month(t, month)])

    async def get_cumulative_monthly_expenses(self, month: date) -> dict[str, Decimal]:
        """Joint expenses from January 1 through the end of the target month."""
        transactions = await self.get_transactions()
        window = [
            t for t in transactions
            if t.date.year == month.year and t.date.month <= month.month
        ]
        return self._sum_joint_expenses(window)

    async def get_monthly_income(self, month: date) -> dict[str, Decimal]:
        """Joint income for one month as positive amounts, keyed by category."""
        transactions = await self.get_transactions()
        income: dict[str, Decimal] = {}

        for transaction in transactions:
            if not _in_month(transaction, month):
                continue
            for posting in transaction.postings:
                if not is_joint_income(posting):
                    continue
                # Income is credited, so ledger amounts are negative
                amount = -effective_amount(posting, transaction)
                category_name = category(posting)
                if amount != ZERO and category_name:
                    income[category_name] = income.get(category_name, ZERO) + amount

        return income

    async def get_monthly_transactions(self, month: date) -> list[Transaction]:
        """The month's transactions, newest first."""
        transactions = await self.get_transactions()
        return sorted(
            (t for t in transactions if _in_month(t, month)),
            key=lambda t: t.date,
            reverse=True,
        )
