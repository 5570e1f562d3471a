from typing import Iterable, Tuple

from finance_core.aggregate import filter_window, sum_by_category
from finance_core.domain import (
    Budget,
    BudgetAnalysis,
    BudgetPeriod,
    BudgetStatus,
    Transaction,
    TransactionType,
    Window,
)

UNDER_BUDGET_BELOW = 90.0
OVER_BUDGET_ABOVE = 110.0
MONTHS_PER_YEAR = 12


def monthly_amount(budget: Budget) -> float:
    if budget.period == BudgetPeriod.YEARLY:
        return budget.amount / MONTHS_PER_YEAR
    return budget.amount


def usage_percent(actual: float, budget_amount: float) -> float:
    if budget_amount <= 0:
        return 0.0
    return actual / budget_amount * 100


def classify(percentage: float) -> BudgetStatus:
    if percentage < UNDER_BUDGET_BELOW:
        return BudgetStatus.UNDER
    if percentage > OVER_BUDGET_ABOVE:
        return BudgetStatus.OVER
    return BudgetStatus.ON_TRACK


def analyze(
    trans: Iterable[Transaction], budgets: Iterable[Budget], window: Window
) -> Tuple[BudgetAnalysis, ...]:
    """Compare every budget with the expenses recorded for its category in ``window``.

    One entry per budget, including budgets with no spending at all. Entries
    are ordered by monthly budget amount, largest first; equal amounts keep
    registry order.
    """
    spent = sum_by_category(
        filter_window(trans, window.month, window.year), TransactionType.EXPENSE
    )

    rows = []
    for b in budgets:
        budget_amount = monthly_amount(b)
        actual = spent.get(b.category, 0.0)
        percentage = usage_percent(actual, budget_amount)
        rows.append(
            BudgetAnalysis(
                category=b.category,
                budget_amount=budget_amount,
                actual_amount=actual,
                difference=actual - budget_amount,
                percentage=percentage,
                status=classify(percentage),
            )
        )

    return tuple(sorted(rows, key=lambda a: a.budget_amount, reverse=True))
