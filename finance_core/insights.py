from datetime import date
from typing import Dict, Iterable, Sequence, Tuple

from finance_core.aggregate import (
    filter_type,
    filter_window,
    percent_change,
    sum_amounts,
    sum_by_category,
)
from finance_core.budgets import analyze
from finance_core.domain import (
    Budget,
    BudgetAnalysis,
    BudgetWarning,
    Category,
    CategoryTotal,
    Insights,
    Transaction,
    TransactionType,
)
from finance_core.lazy import above, iter_transactions
from finance_core.periods import current_window, days_in_month, previous_window

TOP_CATEGORY_COUNT = 3
WARNING_ABOVE = 80.0
OVER_ABOVE = 100.0
HIGH_EXPENSE_COUNT = 5
HIGH_EXPENSE_ABOVE = 100.0


def top_categories(
    totals: Dict[Category, float], count: int = TOP_CATEGORY_COUNT
) -> Tuple[CategoryTotal, ...]:
    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return tuple(
        CategoryTotal(category=category, amount=amount)
        for category, amount in ranked[: max(0, count)]
    )


def budget_warnings(analyses: Iterable[BudgetAnalysis]) -> Tuple[BudgetWarning, ...]:
    return tuple(
        BudgetWarning(
            category=a.category,
            spent=a.actual_amount,
            budget=a.budget_amount,
            percentage=a.percentage,
            is_over=a.percentage > OVER_ABOVE,
        )
        for a in analyses
        if a.percentage > WARNING_ABOVE
    )


def high_expenses(trans: Sequence[Transaction]) -> Tuple[Transaction, ...]:
    """Largest expenses of the month: top five by amount, then only those above 100.

    The cut to five happens before the amount filter, so the result can be
    shorter than five even when lower-ranked transactions exceed 100.
    """
    largest = sorted(trans, key=lambda t: t.amount, reverse=True)[:HIGH_EXPENSE_COUNT]
    return tuple(iter_transactions(largest, above(HIGH_EXPENSE_ABOVE)))


def compute_insights(
    trans: Iterable[Transaction], budgets: Iterable[Budget], now: date
) -> Insights:
    trans = tuple(trans)
    this_window = current_window(now)
    last_window = previous_window(now)

    expenses = filter_type(trans, TransactionType.EXPENSE)
    this_month = filter_window(expenses, this_window.month, this_window.year)
    last_month = filter_window(expenses, last_window.month, last_window.year)

    this_month_total = sum_amounts(this_month)
    last_month_total = sum_amounts(last_month)

    # day of month is never below 1
    daily_average = this_month_total / now.day

    return Insights(
        this_month_total=this_month_total,
        last_month_total=last_month_total,
        spending_change_percent=percent_change(this_month_total, last_month_total),
        top_categories=top_categories(
            sum_by_category(this_month, TransactionType.EXPENSE)
        ),
        daily_average=daily_average,
        projected_monthly=daily_average * days_in_month(this_window),
        budget_warnings=budget_warnings(analyze(trans, budgets, this_window)),
        high_expenses=high_expenses(this_month),
    )
