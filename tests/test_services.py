from datetime import date, datetime

from finance_core import FinanceService, aggregate_by_category, aggregate_monthly, analyze_budgets
from finance_core.domain import (
    Budget,
    BudgetStatus,
    Category,
    MonthlyTotal,
    Transaction,
    TransactionType,
    Window,
)
from finance_core.ledger import BudgetRegistry, Ledger

NOW = datetime(2025, 3, 10)


def make_tx(id, amount, category, on):
    category = Category(category)
    return Transaction(id, amount, f"tx {id}", category, category.type, on)


def sample():
    transactions = (
        make_tx("t1", 100.0, "food", date(2025, 3, 2)),
        make_tx("t2", 50.0, "food", date(2025, 2, 2)),
        make_tx("t3", 2500.0, "salary", date(2025, 3, 1)),
        make_tx("t4", 2000.0, "salary", date(2025, 2, 1)),
    )
    budgets = (Budget("b1", "food", 120.0, "monthly"),)
    return transactions, budgets


def test_analyze_budgets_uses_current_month():
    transactions, budgets = sample()
    (row,) = analyze_budgets(transactions, budgets, NOW)
    assert row.actual_amount == 100.0
    assert row.status is BudgetStatus.UNDER


def test_aggregate_monthly():
    transactions, _ = sample()
    result = aggregate_monthly(transactions, TransactionType.EXPENSE, 3, NOW)
    assert result == (
        MonthlyTotal("Jan 2025", 0.0),
        MonthlyTotal("Feb 2025", 50.0),
        MonthlyTotal("Mar 2025", 100.0),
    )


def test_aggregate_by_category():
    transactions, _ = sample()
    assert aggregate_by_category(transactions, TransactionType.INCOME) == {Category.SALARY: 4500.0}


def test_service_reads_fresh_snapshots():
    transactions, budgets = sample()
    ledger = Ledger(transactions)
    registry = BudgetRegistry(budgets)
    service = FinanceService(ledger, registry, clock=lambda: NOW)

    assert service.summary().this_month_expenses == 100.0
    ledger.add(40.0, "Dinner", "food", "expense", date(2025, 3, 9))
    assert service.summary().this_month_expenses == 140.0
    assert service.budget_analysis()[0].status is BudgetStatus.OVER
    assert service.insights().budget_warnings[0].is_over is True
    assert service.by_category(TransactionType.EXPENSE)[Category.FOOD] == 190.0


def test_explicit_now_overrides_clock():
    transactions, budgets = sample()
    service = FinanceService(Ledger(transactions), BudgetRegistry(budgets), clock=lambda: NOW)
    feb = service.summary(now=date(2025, 2, 20))
    assert feb.this_month_income == 2000.0
    assert feb.income_change_percent == 0.0
    assert len(service.monthly(TransactionType.INCOME, month_count=2, now=date(2025, 2, 20))) == 2


def test_dashboard_report():
    transactions, budgets = sample()
    service = FinanceService(Ledger(transactions), BudgetRegistry(budgets), clock=lambda: NOW)
    report = service.dashboard(month_count=4)

    assert report["window"] == Window(3, 2025)
    assert report["summary"].balance == 4350.0
    assert report["insights"].spending_change_percent == 100.0
    assert len(report["budgets"]) == 1
    assert [m.label for m in report["monthly_expenses"]] == ["Dec 2024", "Jan 2025", "Feb 2025", "Mar 2025"]
    assert report["expense_stats"].total == 150.0
    assert report["expense_breakdown"][0].share == 100.0
    assert report["income_breakdown"][0].category is Category.SALARY
