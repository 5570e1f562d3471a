"""Tabular views of ledger data and analysis results for presentation code."""
from typing import Iterable, Sequence

import pandas as pd

from finance_core.domain import BudgetAnalysis, CategoryShare, MonthlyTotal, Transaction, TransactionType

TRANSACTION_COLUMNS = ["id", "date", "amount", "signed_amount", "type", "category", "category_name", "description"]
ANALYSIS_COLUMNS = ["category", "category_name", "budget", "actual", "difference", "percentage", "status"]
MONTHLY_COLUMNS = ["month", "income", "expenses", "net"]
BREAKDOWN_COLUMNS = ["category", "category_name", "amount", "share"]


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "id": t.id,
            "date": t.date,
            "amount": t.amount,
            "signed_amount": t.amount if t.type is TransactionType.INCOME else -t.amount,
            "type": t.type.value,
            "category": t.category.value,
            "category_name": t.category.display_name,
            "description": t.description,
        }
        for t in trans
    ]
    df = pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], errors="coerce", utc=True)
    return df.sort_values("date", ascending=False, kind="stable").reset_index(drop=True)


def analysis_frame(analyses: Iterable[BudgetAnalysis]) -> pd.DataFrame:
    rows = [
        {
            "category": a.category.value,
            "category_name": a.category.display_name,
            "budget": a.budget_amount,
            "actual": a.actual_amount,
            "difference": a.difference,
            "percentage": a.percentage,
            "status": a.status.value,
        }
        for a in analyses
    ]
    return pd.DataFrame(rows, columns=ANALYSIS_COLUMNS)


def monthly_frame(income: Sequence[MonthlyTotal], expenses: Sequence[MonthlyTotal]) -> pd.DataFrame:
    """Side-by-side monthly income and expenses; both inputs must cover the same months."""
    if [m.label for m in income] != [m.label for m in expenses]:
        raise ValueError("income and expenses must cover the same months")

    df = pd.DataFrame(
        {
            "month": [m.label for m in income],
            "income": [m.total for m in income],
            "expenses": [m.total for m in expenses],
        },
        columns=MONTHLY_COLUMNS[:3],
    )
    df["net"] = df["income"] - df["expenses"]
    return df


def breakdown_frame(shares: Iterable[CategoryShare]) -> pd.DataFrame:
    rows = [
        {
            "category": s.category.value,
            "category_name": s.name,
            "amount": s.amount,
            "share": s.share,
        }
        for s in shares
    ]
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)
