"""Budget matching package."""

from ledgerlens.budgets.matcher import BudgetMatcher

__all__ = ["BudgetMatcher"]
