import math
from datetime import date, datetime

from finance_core.budgets import analyze
from finance_core.domain import Budget, Category, Transaction, Window
from finance_core.insights import (
    budget_warnings,
    compute_insights,
    high_expenses,
    top_categories,
)

NOW = datetime(2025, 3, 10, 18, 0)


def make_tx(id, amount, category, on):
    category = Category(category)
    return Transaction(id, amount, f"tx {id}", category, category.type, on)


def make_budget(id, category, amount, period="monthly"):
    return Budget(id=id, category=category, amount=amount, period=period)


def test_month_over_month_totals():
    trans = (
        make_tx("t1", 300.0, "food", date(2025, 3, 2)),
        make_tx("t2", 200.0, "food", date(2025, 2, 14)),
        make_tx("t3", 1000.0, "salary", date(2025, 3, 1)),
        make_tx("t4", 999.0, "travel", date(2024, 3, 5)),
    )
    result = compute_insights(trans, (), NOW)
    assert result.this_month_total == 300.0
    assert result.last_month_total == 200.0
    assert result.spending_change_percent == 50.0


def test_no_baseline_means_zero_change():
    trans = (make_tx("t1", 300.0, "food", date(2025, 3, 2)),)
    result = compute_insights(trans, (), NOW)
    assert result.last_month_total == 0.0
    assert result.spending_change_percent == 0.0


def test_january_compares_with_december():
    trans = (
        make_tx("t1", 150.0, "food", date(2025, 1, 3)),
        make_tx("t2", 100.0, "food", date(2024, 12, 20)),
    )
    result = compute_insights(trans, (), date(2025, 1, 10))
    assert result.last_month_total == 100.0
    assert result.spending_change_percent == 50.0


def test_daily_average_and_projection():
    trans = (make_tx("t1", 310.0, "food", date(2025, 3, 2)),)
    result = compute_insights(trans, (), NOW)
    assert result.daily_average == 31.0
    assert result.projected_monthly == 31.0 * 31


def test_first_day_of_month():
    trans = (make_tx("t1", 56.0, "food", date(2025, 2, 1)),)
    result = compute_insights(trans, (), date(2025, 2, 1))
    assert result.daily_average == 56.0
    assert result.projected_monthly == 56.0 * 28


def test_top_categories_limited_and_ranked():
    trans = (
        make_tx("t1", 50.0, "food", date(2025, 3, 1)),
        make_tx("t2", 500.0, "housing", date(2025, 3, 1)),
        make_tx("t3", 80.0, "travel", date(2025, 3, 2)),
        make_tx("t4", 70.0, "food", date(2025, 3, 3)),
        make_tx("t5", 10.0, "education", date(2025, 3, 3)),
    )
    top = compute_insights(trans, (), NOW).top_categories
    assert [(c.category, c.amount) for c in top] == [
        (Category.HOUSING, 500.0),
        (Category.FOOD, 120.0),
        (Category.TRAVEL, 80.0),
    ]
    assert top[1].name == "Food & Dining"


def test_top_categories_ties_keep_first_seen():
    totals = {Category.TRAVEL: 40.0, Category.FOOD: 40.0, Category.HOUSING: 90.0, Category.SHOPPING: 40.0}
    top = top_categories(totals)
    assert [c.category for c in top] == [Category.HOUSING, Category.TRAVEL, Category.FOOD]


def test_high_expenses_sort_take_five_then_filter():
    amounts = [500.0, 90.0, 200.0, 80.0, 150.0, 300.0]
    trans = tuple(make_tx(f"t{i}", a, "shopping", date(2025, 3, 1)) for i, a in enumerate(amounts))
    assert [t.amount for t in high_expenses(trans)] == [500.0, 300.0, 200.0, 150.0]


def test_high_expenses_never_beyond_rank_five():
    amounts = [600.0, 500.0, 400.0, 300.0, 200.0, 150.0]
    trans = tuple(make_tx(f"t{i}", a, "shopping", date(2025, 3, 1)) for i, a in enumerate(amounts))
    result = high_expenses(trans)
    assert len(result) == 5
    assert 150.0 not in [t.amount for t in result]


def test_high_expenses_only_current_month():
    trans = (
        make_tx("t1", 400.0, "travel", date(2025, 2, 27)),
        make_tx("t2", 120.0, "food", date(2025, 3, 5)),
        make_tx("t3", 5000.0, "salary", date(2025, 3, 5)),
    )
    result = compute_insights(trans, (), NOW)
    assert [t.id for t in result.high_expenses] == ["t2"]


def test_budget_warnings():
    trans = (
        make_tx("t1", 90.0, "food", date(2025, 3, 1)),
        make_tx("t2", 130.0, "travel", date(2025, 3, 1)),
        make_tx("t3", 10.0, "shopping", date(2025, 3, 1)),
    )
    budgets = (
        make_budget("b1", "food", 100.0),
        make_budget("b2", "travel", 1200.0, "yearly"),
        make_budget("b3", "shopping", 100.0),
    )
    warnings = compute_insights(trans, budgets, NOW).budget_warnings
    assert [(w.category, w.is_over) for w in warnings] == [
        (Category.FOOD, False),
        (Category.TRAVEL, True),
    ]
    assert math.isclose(warnings[1].percentage, 130.0)
    assert warnings[1].budget == 100.0
    assert warnings[1].spent == 130.0


def test_budget_warning_threshold_is_strict():
    trans = (make_tx("t1", 80.0, "food", date(2025, 3, 1)),)
    rows = analyze(trans, (make_budget("b1", "food", 100.0),), Window(3, 2025))
    assert budget_warnings(rows) == ()


def test_empty_ledger():
    result = compute_insights((), (), NOW)
    assert result.this_month_total == 0.0
    assert result.daily_average == 0.0
    assert result.top_categories == ()
    assert result.high_expenses == ()
    assert result.budget_warnings == ()
