"""
Expense Aggregation and Budget Comparison

Expense amounts keep their ledger sign: a refund posted to an expense
account reduces the category total.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerlens.ledger.classify import formatted_category
from ledgerlens.ledger.patterns import EXPENSE_ACCOUNT_PATTERN, JOINT_EXPENSES_PREFIX, JOINT_PREFIX
from ledgerlens.models.ledger import Budget, BudgetPeriod, Transaction
from ledgerlens.models.reports import BudgetComparison, BudgetSummary, ExpenseOptions
from ledgerlens.reports.categories import in_month, normalize_category_name


ZERO = Decimal("0")

# Budget comparisons include rent so a rent budget can be tracked
BUDGET_COMPARISON_OPTIONS = ExpenseOptions(filter_joint_only=True, exclude_rent=False)


def process_expense_transactions(
    transactions: Iterable[Transaction],
    options: Optional[ExpenseOptions] = None,
) -> dict[str, Decimal]:
    """
    Signed expense totals per normalized category.

    Only postings with an explicit amount are counted.
    """
    options = options or ExpenseOptions()
    expenses: dict[str, Decimal] = {}

    for transaction in transactions:
        for posting in transaction.postings:
            match = EXPENSE_ACCOUNT_PATTERN.search(posting.account)
            if not match or posting.amount is None:
                continue
            if options.filter_joint_only and not posting.account.startswith(JOINT_PREFIX):
                continue
            if options.exclude_rent and posting.account.endswith(":rent"):
                continue

            category = normalize_category_name(match.group(1))
            if options.budgeted_categories_only and category not in options.budgeted_categories:
                continue

            expenses[category] = expenses.get(category, ZERO) + posting.amount

    return expenses


def calculate_monthly_expenses(
    target: date,
    transactions: Iterable[Transaction],
    options: Optional[ExpenseOptions] = None,
) -> dict[str, Decimal]:
    """process_expense_transactions() over the target month only."""
    monthly = [t for t in transactions if in_month(t, target)]
    return process_expense_transactions(monthly, options)


def _spent_under(expenses: dict[str, Decimal], name: str) -> Decimal:
    """Spend on a category and everything nested below it."""
    prefix = f"{name}:"
    return sum(
        (amount for category, amount in expenses.items()
         if category == name or category.startswith(prefix)),
        ZERO,
    )


def compare_monthly_budgets(
    target: date,
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    options: Optional[ExpenseOptions] = None,
) -> list[BudgetComparison]:
    """
    Spent vs budget for every monthly budget, in budget order.

    Budgets are joined to expenses by normalized category; nested
    categories (dining:restaurants) count towards their parent budget.
    """
    expenses = calculate_monthly_expenses(target, transactions, options or BUDGET_COMPARISON_OPTIONS)
    comparisons = []
    for budget in budgets:
        if budget.period != BudgetPeriod.MONTHLY:
            continue
        name = normalize_category_name(formatted_category(budget))
        comparisons.append(BudgetComparison(
            name=name,
            spent=_spent_under(expenses, name),
            budget=budget.amount,
        ))
    return comparisons


def compare_yearly_budgets(
    year: int,
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
) -> list[BudgetComparison]:
    """
    Spent vs budget for every yearly budget over one calendar year.

    Spend is every explicit amount posted to an account starting with
    joint:expenses:<category>.
    """
    yearly = [t for t in transactions if t.date.year == year]
    comparisons = []
    for budget in budgets:
        if budget.period != BudgetPeriod.YEARLY:
            continue
        category = formatted_category(budget)
        prefix = f"{JOINT_EXPENSES_PREFIX}{category}"
        spent = sum(
            (posting.amount for transaction in yearly for posting in transaction.postings
             if posting.amount is not None and posting.account.startswith(prefix)),
            ZERO,
        )
        comparisons.append(BudgetComparison(name=category, spent=spent, budget=budget.amount))
    return comparisons


def summarize_budgets(comparisons: Iterable[BudgetComparison]) -> BudgetSummary:
    total_budget = ZERO
    total_spent = ZERO
    for comparison in comparisons:
        total_budget += comparison.budget
        total_spent += comparison.spent
    return BudgetSummary(total_budget=total_budget, total_spent=total_spent)
