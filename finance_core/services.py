import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from finance_core import aggregate, budgets as budget_analyzer, insights, summary
from finance_core.config import TREND_MONTHS
from finance_core.domain import (
    Budget,
    BudgetAnalysis,
    Category,
    Insights,
    MonthlyTotal,
    Summary,
    Transaction,
    TransactionType,
)
from finance_core.periods import current_window, trailing_months

logger = logging.getLogger(__name__)


def analyze_budgets(
    transactions: Iterable[Transaction], budgets: Iterable[Budget], now: date
) -> Tuple[BudgetAnalysis, ...]:
    return budget_analyzer.analyze(transactions, budgets, current_window(now))


def compute_insights(
    transactions: Iterable[Transaction], budgets: Iterable[Budget], now: date
) -> Insights:
    return insights.compute_insights(transactions, budgets, now)


def summarize(transactions: Iterable[Transaction], now: date) -> Summary:
    return summary.summarize(transactions, now)


def aggregate_monthly(
    transactions: Iterable[Transaction],
    type_: TransactionType,
    month_count: int,
    now: date,
) -> Tuple[MonthlyTotal, ...]:
    return aggregate.sum_by_month(transactions, type_, trailing_months(now, month_count))


def aggregate_by_category(
    transactions: Iterable[Transaction], type_: TransactionType
) -> Dict[Category, float]:
    return aggregate.sum_by_category(transactions, type_)


class FinanceService:
    """Runs the analytics over fresh snapshots of a ledger and a budget registry.

    ledger: anything with ``list_transactions()``
    registry: anything with ``list_budgets()``
    clock: returns the reference instant when a call does not pass ``now``
    """

    def __init__(self, ledger, registry, clock: Optional[Callable[[], datetime]] = None):
        self.ledger = ledger
        self.registry = registry
        self.clock = clock or datetime.now

    def _now(self, now: Optional[date]) -> date:
        return now if now is not None else self.clock()

    def budget_analysis(self, now: Optional[date] = None) -> Tuple[BudgetAnalysis, ...]:
        return analyze_budgets(
            self.ledger.list_transactions(), self.registry.list_budgets(), self._now(now)
        )

    def insights(self, now: Optional[date] = None) -> Insights:
        return compute_insights(
            self.ledger.list_transactions(), self.registry.list_budgets(), self._now(now)
        )

    def summary(self, now: Optional[date] = None) -> Summary:
        return summarize(self.ledger.list_transactions(), self._now(now))

    def monthly(
        self,
        type_: TransactionType,
        month_count: int = TREND_MONTHS,
        now: Optional[date] = None,
    ) -> Tuple[MonthlyTotal, ...]:
        return aggregate_monthly(
            self.ledger.list_transactions(), type_, month_count, self._now(now)
        )

    def by_category(self, type_: TransactionType) -> Dict[Category, float]:
        return aggregate_by_category(self.ledger.list_transactions(), type_)

    def dashboard(self, now: Optional[date] = None, month_count: int = TREND_MONTHS) -> Dict[str, Any]:
        """Every view of the dashboard computed from one pair of snapshots."""
        now = self._now(now)
        transactions = self.ledger.list_transactions()
        budgets = self.registry.list_budgets()
        logger.debug(
            "Building dashboard for %s from %d transactions and %d budgets",
            current_window(now).key, len(transactions), len(budgets),
        )

        income = aggregate_monthly(transactions, TransactionType.INCOME, month_count, now)
        expenses = aggregate_monthly(transactions, TransactionType.EXPENSE, month_count, now)
        return {
            "window": current_window(now),
            "summary": summarize(transactions, now),
            "insights": compute_insights(transactions, budgets, now),
            "budgets": analyze_budgets(transactions, budgets, now),
            "monthly_income": income,
            "monthly_expenses": expenses,
            "expense_stats": aggregate.monthly_stats(expenses),
            "expense_breakdown": aggregate.category_breakdown(transactions, TransactionType.EXPENSE),
            "income_breakdown": aggregate.category_breakdown(transactions, TransactionType.INCOME),
        }
