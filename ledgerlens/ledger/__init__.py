"""
Ledger Package

Grammar, parser and account classification for plain-text ledgers.
"""

from ledgerlens.ledger.parser import LedgerParser, parse_budgets, parse_ledger
from ledgerlens.ledger import classify, patterns

__all__ = [
    "LedgerParser",
    "classify",
    "parse_budgets",
    "parse_ledger",
    "patterns",
]
