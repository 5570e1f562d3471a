"""Grouping and summation primitives shared by every analysis.

Sums go through ``math.fsum`` so totals do not depend on the order the
ledger hands transactions over.
"""
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from finance_core.domain import (
    Category,
    CategoryShare,
    MonthlyStats,
    MonthlyTotal,
    MonthSlot,
    Transaction,
    TransactionType,
    Window,
)
from finance_core.lazy import by_type, in_window, iter_transactions


def filter_window(
    trans: Iterable[Transaction], month: int, year: int
) -> Tuple[Transaction, ...]:
    return tuple(iter_transactions(trans, in_window(Window(month=month, year=year))))


def filter_type(
    trans: Iterable[Transaction], type_: TransactionType
) -> Tuple[Transaction, ...]:
    return tuple(iter_transactions(trans, by_type(type_)))


def sum_amounts(trans: Iterable[Transaction]) -> float:
    return math.fsum(t.amount for t in trans)


def sum_by_category(
    trans: Iterable[Transaction], type_: TransactionType
) -> Dict[Category, float]:
    """Total per category for one transaction type.

    Categories without matching transactions are left out. Keys keep the
    order in which categories were first seen.
    """
    amounts: Dict[Category, List[float]] = {}
    for t in iter_transactions(trans, by_type(type_)):
        amounts.setdefault(t.category, []).append(t.amount)
    return {category: math.fsum(values) for category, values in amounts.items()}


def sum_by_month(
    trans: Iterable[Transaction],
    type_: TransactionType,
    months: Iterable[MonthSlot],
) -> Tuple[MonthlyTotal, ...]:
    """Totals aligned to ``months``; months with nothing recorded are zero."""
    amounts: Dict[str, List[float]] = defaultdict(list)
    for t in iter_transactions(trans, by_type(type_)):
        amounts[f"{t.date.year:04d}-{t.date.month:02d}"].append(t.amount)
    return tuple(
        MonthlyTotal(label=slot.label, total=math.fsum(amounts.get(slot.key, ())))
        for slot in months
    )


def category_breakdown(
    trans: Iterable[Transaction], type_: TransactionType
) -> Tuple[CategoryShare, ...]:
    totals = sum_by_category(trans, type_)
    grand_total = math.fsum(totals.values())
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return tuple(
        CategoryShare(
            category=category,
            amount=amount,
            share=amount / grand_total * 100 if grand_total > 0 else 0.0,
        )
        for category, amount in ranked
    )


def monthly_stats(totals: Sequence[MonthlyTotal]) -> MonthlyStats:
    total = math.fsum(m.total for m in totals)
    average = total / len(totals) if totals else 0.0
    return MonthlyStats(total=total, average=average)


def percent_change(current: float, previous: float) -> float:
    # no baseline -> no change
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100
