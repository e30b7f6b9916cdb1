"""
Posting Classifier

Pure functions deriving properties from an account path.

DESIGN DECISION: These are never stored on the Posting.
A posting is plain data; classification is recomputed on demand so it
always reflects the account path as written.

Account paths are colon-delimited: the first segment is the owner
(joint, or a person), the second the account type (expenses, income,
assets, ...), the rest the category.
"""

from decimal import Decimal
from typing import Union

from ledgerlens.ledger.patterns import (
    BUDGET_PREFIXES,
    JOINT_EXPENSES_PREFIX,
    JOINT_INCOME_PREFIX,
)
from ledgerlens.models.ledger import Budget, Posting, Transaction


ZERO = Decimal("0")

AccountLike = Union[Posting, str]


def _account(value: AccountLike) -> str:
    return value.account if isinstance(value, Posting) else value


def is_joint_expense(value: AccountLike) -> bool:
    return _account(value).startswith(JOINT_EXPENSES_PREFIX)


def is_joint_income(value: AccountLike) -> bool:
    return _account(value).startswith(JOINT_INCOME_PREFIX)


def category(value: AccountLike) -> str:
    """
    Category of a joint expense or income account.

    joint:expenses:dining:restaurants -> dining:restaurants
    Empty for anything that isn't a joint expense or income account.
    """
    if not (is_joint_expense(value) or is_joint_income(value)):
        return ""
    parts = _account(value).split(":")
    if len(parts) <= 2:
        return ""
    return ":".join(parts[2:])


def subcategory(value: AccountLike) -> str:
    """
    The segment right after the first literal `expenses` segment.

    joint:expenses:dining:restaurants -> dining
    Empty unless the account is a joint expense.
    """
    if not is_joint_expense(value):
        return ""
    parts = _account(value).split(":")
    for index, part in enumerate(parts[:-1]):
        if part == "expenses":
            return parts[index + 1]
    return ""


def owner(value: AccountLike) -> str:
    return _account(value).split(":")[0]


def formatted_category(value: Union[Budget, str]) -> str:
    """
    Budget category with the budget:expenses: (or budget:income:) prefix stripped.

    budget:expenses:dining -> dining; dining -> dining
    """
    name = value.category if isinstance(value, Budget) else value
    for prefix in BUDGET_PREFIXES:
        if name.startswith(prefix) and len(name) > len(prefix):
            return name[len(prefix):]
    return name


# =============================================================================
# IMPLICIT AMOUNTS
# =============================================================================

def effective_amount(posting: Posting, transaction: Transaction) -> Decimal:
    """
    Explicit amount, else the negation of the first other explicit amount.

    This is the balancing rule the monthly repository reports use. With more
    than two postings it can misallocate: a posting missing its amount only
    balances against the first other posting that has one. Kept for
    compatibility with existing reports.
    """
    if posting.amount is not None:
        return posting.amount
    for other in transaction.postings:
        if other is not posting and other.amount is not None:
            return -other.amount
    return ZERO


def resolve_amount(posting: Posting, transaction: Transaction) -> Decimal:
    """
    Explicit amount, else the value that balances the transaction.

    With exactly one posting missing its amount, that posting takes the
    negated sum of every explicit amount, so the transaction sums to zero.
    With several missing amounts the transaction is under-determined and
    each falls back to effective_amount().
    """
    if posting.amount is not None:
        return posting.amount
    missing = sum(1 for p in transaction.postings if p.amount is None)
    if missing == 1:
        return -sum((p.amount for p in transaction.postings if p.amount is not None), ZERO)
    return effective_amount(posting, transaction)


def resolved_amounts(transaction: Transaction) -> list[Decimal]:
    """Every posting's amount, explicit or inferred, in posting order."""
    return [resolve_amount(posting, transaction) for posting in transaction.postings]


def is_balanced(transaction: Transaction) -> bool:
    return sum(resolved_amounts(transaction), ZERO) == ZERO
