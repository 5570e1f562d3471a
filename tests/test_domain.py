import pytest

from finance_core.domain import (
    CATEGORY_DISPLAY_NAMES,
    CATEGORY_TYPES,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    Budget,
    BudgetPeriod,
    Category,
    Transaction,
    TransactionType,
    Window,
    categories_for,
)
from datetime import date, datetime


def test_every_category_has_display_name_and_type():
    assert set(CATEGORY_DISPLAY_NAMES) == set(Category)
    assert set(CATEGORY_TYPES) == set(Category)


def test_category_partition():
    assert INCOME_CATEGORIES == (
        Category.SALARY,
        Category.FREELANCE,
        Category.INVESTMENT,
        Category.BUSINESS,
        Category.OTHER_INCOME,
    )
    assert len(EXPENSE_CATEGORIES) == 10
    assert not set(INCOME_CATEGORIES) & set(EXPENSE_CATEGORIES)
    assert categories_for("expense") == EXPENSE_CATEGORIES


def test_wire_values():
    assert Category.OTHER_EXPENSE.value == "other_expense"
    assert Category.FOOD.display_name == "Food & Dining"
    assert Category.OTHER_EXPENSE.display_name == "Other Expenses"
    assert Category.SALARY.type is TransactionType.INCOME
    assert BudgetPeriod("yearly") is BudgetPeriod.YEARLY


def test_transaction_coerces_wire_strings():
    t = Transaction(
        id="t1",
        amount=10.0,
        description="Lunch",
        category="food",
        type="expense",
        date=date(2025, 3, 4),
    )
    assert t.category is Category.FOOD
    assert t.type is TransactionType.EXPENSE
    assert {t.category: 1}[Category.FOOD] == 1


def test_transaction_is_immutable():
    t = Transaction("t1", 10.0, "Lunch", Category.FOOD, TransactionType.EXPENSE, date(2025, 3, 4))
    with pytest.raises(AttributeError):
        t.amount = 20.0


def test_unknown_category_rejected_on_construction():
    with pytest.raises(ValueError):
        Budget(id="b1", category="groceries", amount=10.0, period="monthly")


def test_window_contains_ignores_day_and_time():
    w = Window(month=2, year=2024)
    assert w.key == "2024-02"
    assert w.contains(date(2024, 2, 29))
    assert w.contains(datetime(2024, 2, 1, 0, 0))
    assert not w.contains(date(2023, 2, 10))
    assert not w.contains(date(2024, 3, 1))
