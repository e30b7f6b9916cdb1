"""
Ledger Patterns

Every regular expression that reads ledger text or account paths lives here,
so the parser and the report functions can't drift apart.

HEADER_PATTERN      2024-01-05 Coffee shop  /  2024/01/05 Coffee shop
POSTING_PATTERN     <indent>joint:expenses:dining  $1,015.00 USD  ; comment
PERIODIC_PATTERN    ~ Monthly  /  ~ Yearly
BUDGET_DIRECTIVE    ; budget: dining: 300 monthly
INCOME_ACCOUNT      (joint:)*income:<category>
EXPENSE_ACCOUNT     (<owner>:)?expenses:<category>
"""

import re
from decimal import Decimal


# One separator kind per date: 2024-01/05 is not a header.
HEADER_PATTERN = re.compile(
    r"^(?P<year>\d{4})(?P<sep>[-/])(?P<month>\d{2})(?P=sep)(?P<day>\d{2})\s+(?P<description>.+)$"
)

_NUMBER = r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?|\.\d+"

POSTING_PATTERN = re.compile(
    r"^(?P<account>[^;\s](?:[^;]*?[^;\s])?)"
    r"(?:\s+(?P<sign>[-+])?(?P<symbol>\$)?\s*(?P<number>[-+]?(?:" + _NUMBER + r"))"
    r"(?:\s+(?P<currency>[A-Z]{3}))?)?"
    r"\s*(?:;.*)?$"
)

PERIODIC_PATTERN = re.compile(r"^~\s*(?P<period>monthly|yearly)\b", re.IGNORECASE)

BUDGET_DIRECTIVE_PATTERN = re.compile(
    r"^;\s*budget:\s*(?P<category>[^;]+?)\s*:\s*\$?(?P<number>[-+]?(?:" + _NUMBER + r"))"
    r"\s+\(?(?P<period>monthly|yearly)\)?\s*$",
    re.IGNORECASE,
)

INCOME_ACCOUNT_PATTERN = re.compile(r"(?:joint:)*income:([^;]+)", re.IGNORECASE)

EXPENSE_ACCOUNT_PATTERN = re.compile(r"(?:[^:]+:)?expenses:([^;]+)")

JOINT_PREFIX = "joint:"
JOINT_EXPENSES_PREFIX = "joint:expenses:"
JOINT_INCOME_PREFIX = "joint:income:"
BUDGET_PREFIXES = ("budget:expenses:", "budget:income:")
OPENING_BALANCES_MARKER = "opening balances"


def parse_number(text: str) -> Decimal:
    """Turn a matched amount ("-1,015.00") into a Decimal."""
    return Decimal(text.replace(",", ""))
