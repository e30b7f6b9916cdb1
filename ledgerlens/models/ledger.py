"""
Core Ledger Models for ledgerlens

These models define the shapes produced by the parser and held in the
repository cache. They are designed to:
1. Be immutable once built (frozen models, tuples for sequences)
2. Stay plain - derived fields live in ledgerlens.ledger.classify
3. Be serializable for logging and for the presentation layer

DESIGN DECISION: Amounts are Decimal, never float.
Sums of cents must come out exact when categories are compared to budgets.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================

class BudgetPeriod(str, Enum):
    """How often a budget amount applies."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


# =============================================================================
# LEDGER RECORDS
# =============================================================================

class Posting(BaseModel):
    """
    One account/amount leg of a transaction.

    A posting without an amount is implicit: its value is inferred so
    that the transaction balances.
    """
    model_config = ConfigDict(frozen=True)

    account: str = Field(
        ...,
        min_length=1,
        description="Colon-delimited account path, e.g. joint:expenses:dining"
    )
    amount: Optional[Decimal] = Field(
        default=None,
        description="Signed amount, None when implicit"
    )
    currency: Optional[str] = Field(
        default=None,
        max_length=3,
        description="Currency code (USD for $ amounts)"
    )


class Transaction(BaseModel):
    """
    A dated ledger entry with its postings.

    The description is kept exactly as written. Use split_description()
    for the "tag | text" convention.
    """
    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(
        ...,
        description="Transaction date"
    )
    description: str = Field(
        ...,
        description="Raw description from the header line"
    )
    postings: tuple[Posting, ...] = Field(
        default=(),
        description="Postings in declaration order"
    )
    note: Optional[str] = Field(
        default=None,
        description="Comment lines attached to the transaction, newline-joined"
    )


class Budget(BaseModel):
    """A budget amount for one category and period."""
    model_config = ConfigDict(frozen=True)

    category: str = Field(
        ...,
        min_length=1,
        description="Category as declared, e.g. budget:expenses:dining"
    )
    amount: Decimal = Field(
        ...,
        description="Budgeted amount per period"
    )
    period: BudgetPeriod = Field(
        ...,
        description="Monthly or yearly"
    )


class LedgerSnapshot(BaseModel):
    """
    One parsed copy of the ledger.

    Transactions and budgets always come from the same fetch, so a
    snapshot is replaced as a whole, never field by field.
    """
    model_config = ConfigDict(frozen=True)

    transactions: tuple[Transaction, ...] = Field(default=())
    budgets: tuple[Budget, ...] = Field(default=())
    last_modified: Optional[dt.datetime] = Field(
        default=None,
        description="Last-modified marker reported by storage for this fetch"
    )
    fetched_at: dt.datetime = Field(
        default_factory=dt.datetime.now,
        description="When the text was fetched"
    )


def split_description(description: str) -> tuple[Optional[str], str]:
    """
    Split a "tag | text" description.

    Returns (tag, text). Without a pipe the tag is None and the text is the
    whole description.
    """
    if "|" not in description:
        return None, description.strip()
    tag, _, text = description.partition("|")
    return tag.strip() or None, text.strip()
