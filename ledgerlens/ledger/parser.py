"""
Ledger Parser

Converts raw ledger text into transactions and budgets.

DESIGN DECISION: Parsing is total.
Any text parses. Lines that match nothing are dropped rather than
reported, because a ledger file is edited by hand and a single typo
must not take every report down with it.

Line classification, first match wins:
1. Blank                       -> skipped
2. Comment (;)                 -> note of the open transaction
3. Header (date description)   -> closes the open transaction, opens a new one
4. Periodic block (~ Monthly)  -> closes the open transaction; budget lines follow
5. Indented posting            -> appended to the open transaction
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ledgerlens.ledger.patterns import (
    BUDGET_DIRECTIVE_PATTERN,
    HEADER_PATTERN,
    PERIODIC_PATTERN,
    POSTING_PATTERN,
    parse_number,
)
from ledgerlens.models.ledger import Budget, BudgetPeriod, Posting, Transaction


class _OpenTransaction:
    """Mutable accumulator for the transaction being read."""

    def __init__(self, when: date, description: str):
        self.date = when
        self.description = description
        self.postings: list[Posting] = []
        self.note_lines: list[str] = []

    def close(self) -> Transaction:
        return Transaction(
            date=self.date,
            description=self.description,
            postings=tuple(self.postings),
            note="\n".join(self.note_lines) if self.note_lines else None,
        )


def _parse_header(line: str) -> tuple[bool, Optional[date], str]:
    """
    Returns (is_header, date, description).

    A header-shaped line whose date is not on the calendar is still a
    header, but with no date.
    """
    match = HEADER_PATTERN.match(line)
    if not match:
        return False, None, ""
    try:
        when = date(int(match.group("year")), int(match.group("month")), int(match.group("day")))
    except ValueError:
        return True, None, ""
    return True, when, match.group("description").strip()


def _parse_posting(line: str) -> Optional[Posting]:
    match = POSTING_PATTERN.match(line)
    if not match:
        return None

    amount: Optional[Decimal] = None
    currency: Optional[str] = None
    if match.group("number") is not None:
        # One sign per amount: -$5 or $-5, never -$-5
        if match.group("sign") and match.group("number")[0] in "+-":
            return None
        try:
            amount = parse_number(match.group("number"))
        except InvalidOperation:
            return None
        if match.group("sign") == "-":
            amount = -amount
        if match.group("symbol"):
            currency = "USD"
    if match.group("currency"):
        currency = match.group("currency")

    return Posting(account=match.group("account"), amount=amount, currency=currency)


class LedgerParser:
    """
    Parses ledger text.

    Stateless; one instance can be shared by any number of callers.
    """

    def parse(self, content: str) -> list[Transaction]:
        """
        Parse transactions, in file order.

        Transactions are only emitted once every line belonging to them has
        been read.
        """
        transactions: list[Transaction] = []
        current: Optional[_OpenTransaction] = None

        for line in content.splitlines():
            trimmed = line.strip()

            if not trimmed:
                continue

            if trimmed.startswith(";"):
                if current is not None:
                    current.note_lines.append(trimmed[1:].strip())
                continue

            is_header, when, description = _parse_header(trimmed)
            if is_header or PERIODIC_PATTERN.match(trimmed):
                if current is not None:
                    transactions.append(current.close())
                current = _OpenTransaction(when, description) if when else None
                continue

            # Postings must be indented
            if line[0].isspace() and current is not None:
                posting = _parse_posting(trimmed)
                if posting is not None:
                    current.postings.append(posting)

        if current is not None:
            transactions.append(current.close())

        return transactions

    def parse_budgets(self, content: str) -> list[Budget]:
        """
        Parse budget declarations, in file order.

        Two forms are recognized:
            ; budget: dining: 300 monthly

            ~ Monthly
                budget:expenses:dining    $200.00
        """
        budgets: list[Budget] = []
        period: Optional[BudgetPeriod] = None

        for line in content.splitlines():
            trimmed = line.strip()

            if not trimmed:
                continue

            if trimmed.startswith(";"):
                match = BUDGET_DIRECTIVE_PATTERN.match(trimmed)
                if match:
                    try:
                        amount = parse_number(match.group("number"))
                    except InvalidOperation:
                        continue
                    budgets.append(Budget(
                        category=match.group("category").strip(),
                        amount=amount,
                        period=BudgetPeriod(match.group("period").lower()),
                    ))
                continue

            periodic = PERIODIC_PATTERN.match(trimmed)
            if periodic:
                period = BudgetPeriod(periodic.group("period").lower())
                continue

            if not line[0].isspace():
                period = None
                continue

            if period is not None:
                posting = _parse_posting(trimmed)
                if posting is not None and posting.amount is not None:
                    budgets.append(Budget(
                        category=posting.account,
                        amount=posting.amount,
                        period=period,
                    ))

        return budgets


_default_parser = LedgerParser()


def parse_ledger(content: str) -> list[Transaction]:
    """Parse transactions with a shared parser."""
    return _default_parser.parse(content)


def parse_budgets(content: str) -> list[Budget]:
    """Parse budgets with a shared parser."""
    return _default_parser.parse_budgets(content)
