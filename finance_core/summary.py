from datetime import date
from typing import Iterable

from finance_core.aggregate import filter_type, filter_window, percent_change, sum_amounts
from finance_core.domain import Summary, Transaction, TransactionType
from finance_core.periods import current_window, previous_window


def savings_rate(income: float, expenses: float) -> float:
    if income <= 0:
        return 0.0
    return (income - expenses) / income * 100


def summarize(trans: Iterable[Transaction], now: date) -> Summary:
    """Headline figures: all-time balance plus this month against last month."""
    trans = tuple(trans)
    income = filter_type(trans, TransactionType.INCOME)
    expenses = filter_type(trans, TransactionType.EXPENSE)

    total_income = sum_amounts(income)
    total_expenses = sum_amounts(expenses)

    this_w = current_window(now)
    last_w = previous_window(now)
    this_income = sum_amounts(filter_window(income, this_w.month, this_w.year))
    this_expenses = sum_amounts(filter_window(expenses, this_w.month, this_w.year))
    last_income = sum_amounts(filter_window(income, last_w.month, last_w.year))
    last_expenses = sum_amounts(filter_window(expenses, last_w.month, last_w.year))

    return Summary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        this_month_income=this_income,
        this_month_expenses=this_expenses,
        last_month_income=last_income,
        last_month_expenses=last_expenses,
        income_change_percent=percent_change(this_income, last_income),
        expense_change_percent=percent_change(this_expenses, last_expenses),
        savings_rate=savings_rate(this_income, this_expenses),
    )
