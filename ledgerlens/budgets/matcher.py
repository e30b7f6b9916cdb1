"""
Budget Matcher

Resolves a category to its budgeted amount for a period.

Resolution order:
1. Exact match on the formatted category
2. Match on the last path segment only (dining:restaurants ~ restaurants)
3. Zero

An unbudgeted category is a normal state, not an error.
"""

from decimal import Decimal
from typing import Iterable

from ledgerlens.ledger.classify import formatted_category
from ledgerlens.models.ledger import Budget, BudgetPeriod


ZERO = Decimal("0")


def _last_segment(path: str) -> str:
    return path.split(":")[-1]


class BudgetMatcher:
    """Looks up budgets parsed from one ledger snapshot."""

    def __init__(self, budgets: Iterable[Budget]):
        self._budgets = tuple(budgets)

    def resolve(self, category: str, is_yearly: bool = False) -> Decimal:
        """
        Budgeted amount for a category.

        Args:
            category: Category path, e.g. dining or dining:restaurants
            is_yearly: Look at yearly budgets instead of monthly ones

        Returns:
            The budget amount, or 0 when nothing matches
        """
        period = BudgetPeriod.YEARLY if is_yearly else BudgetPeriod.MONTHLY
        candidates = [budget for budget in self._budgets if budget.period == period]

        for budget in candidates:
            if formatted_category(budget) == category:
                return budget.amount

        simplified = _last_segment(category)
        for budget in candidates:
            if _last_segment(formatted_category(budget)) == simplified:
                return budget.amount

        return ZERO

    def budgets_for(self, period: BudgetPeriod) -> list[Budget]:
        return [budget for budget in self._budgets if budget.period == period]
