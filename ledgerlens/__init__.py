"""
ledgerlens - Source Package

Turns a plain-text double-entry ledger into structured transactions
and budgets, then derives household reports from them.

DESIGN PRINCIPLES:
1. Parsing never fails, malformed lines are dropped
2. Fail loudly only at the storage boundary
3. Reports are pure functions over parsed data
4. Every categorization gap is traceable in the audit log
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "ledgerlens Team"
