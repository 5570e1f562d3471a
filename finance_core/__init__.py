"""Budget analysis core for a personal finance tracker.

The analytics are pure functions over snapshots of transactions and budgets;
``Ledger`` and ``BudgetRegistry`` are in-memory collaborators that hand out
those snapshots.
"""
from finance_core.domain import (  # noqa: F401
    Budget,
    BudgetAnalysis,
    BudgetPeriod,
    BudgetStatus,
    Category,
    Insights,
    Summary,
    Transaction,
    TransactionType,
)
from finance_core.ledger import BudgetRegistry, Ledger  # noqa: F401
from finance_core.services import (  # noqa: F401
    FinanceService,
    aggregate_by_category,
    aggregate_monthly,
    analyze_budgets,
    compute_insights,
    summarize,
)

__all__ = [
    "Budget", "BudgetAnalysis", "BudgetPeriod", "BudgetStatus", "Category",
    "Insights", "Summary", "Transaction", "TransactionType",
    "BudgetRegistry", "Ledger", "FinanceService",
    "aggregate_by_category", "aggregate_monthly", "analyze_budgets",
    "compute_insights", "summarize",
]
