"""
Shared fixtures for ledgerlens tests.

No network or disk access here; storage-specific tests build their own.
"""

import pytest

from ledgerlens.audit import AuditLogger, InMemoryAuditSink
from ledgerlens.ledger import parse_budgets, parse_ledger


COFFEE_SHOP_LEDGER = """\
2024-01-05 Coffee shop
    joint:expenses:dining  15.00 USD
    joint:assets:checking  -15.00 USD
"""

SAMPLE_LEDGER = """\
; budget: dining: 300 monthly
; budget: travel: 2,400 yearly

~ Monthly
    budget:expenses:groceries    $600.00
    budget:expenses:rent         $1,500.00

2023-12-20 Opening Balances
    joint:assets:savings:ally          $10,000.00
    joint:assets:brokerage:vanguard     $4,000.00
    equity:opening

2024-01-05 Coffee shop
    joint:expenses:dining  15.00 USD
    joint:assets:checking  -15.00 USD

2024-01-10 Payroll | January salary
    ; paid on time
    joint:assets:savings:ally     $5,000.00
    joint:income:salary          -$5,000.00

2024-01-12 Dinner out
    joint:expenses:dining:restaurants   $40.00
    joint:assets:checking

2024-01-15 Rent
    joint:expenses:rent    $1,500.00
    joint:assets:checking

2024-02-03 Flights
    joint:expenses:travel:flights   $350.00
    joint:assets:checking

2024-02-18 Groceries
    joint:expenses:groceries    $120.50
    alice:expenses:books         $25.00
    joint:assets:checking
"""


@pytest.fixture
def coffee_shop_ledger() -> str:
    return COFFEE_SHOP_LEDGER


@pytest.fixture
def sample_ledger() -> str:
    return SAMPLE_LEDGER


@pytest.fixture
def sample_transactions():
    return parse_ledger(SAMPLE_LEDGER)


@pytest.fixture
def sample_budgets():
    return parse_budgets(SAMPLE_LEDGER)


@pytest.fixture
def audit_sink() -> InMemoryAuditSink:
    return InMemoryAuditSink(max_events=500)


@pytest.fixture
def audit_logger(audit_sink) -> AuditLogger:
    return AuditLogger(audit_sink)
