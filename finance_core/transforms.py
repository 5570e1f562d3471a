import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from finance_core.domain import Budget, Transaction

logger = logging.getLogger(__name__)


def parse_timestamp(value: Union[str, date, None]) -> Optional[datetime]:
    """Parse an ISO 8601 string; a trailing ``Z`` is read as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _field(data: Dict[str, Any], snake: str, camel: str) -> Any:
    return data.get(snake, data.get(camel))


def transaction_from_dict(data: Dict[str, Any]) -> Transaction:
    return Transaction(
        id=str(data["id"]),
        amount=float(data["amount"]),
        description=data["description"],
        category=data["category"],
        type=data["type"],
        date=parse_timestamp(data["date"]),
        created_at=parse_timestamp(_field(data, "created_at", "createdAt")),
        updated_at=parse_timestamp(_field(data, "updated_at", "updatedAt")),
    )


def budget_from_dict(data: Dict[str, Any]) -> Budget:
    return Budget(
        id=str(data["id"]),
        category=data["category"],
        amount=float(data["amount"]),
        period=data["period"],
        created_at=parse_timestamp(_field(data, "created_at", "createdAt")),
        updated_at=parse_timestamp(_field(data, "updated_at", "updatedAt")),
    )


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def transaction_to_dict(t: Transaction) -> Dict[str, Any]:
    return {
        "id": t.id,
        "amount": t.amount,
        "description": t.description,
        "category": t.category.value,
        "type": t.type.value,
        "date": _iso(t.date),
        "createdAt": _iso(t.created_at),
        "updatedAt": _iso(t.updated_at),
    }


def budget_to_dict(b: Budget) -> Dict[str, Any]:
    return {
        "id": b.id,
        "category": b.category.value,
        "amount": b.amount,
        "period": b.period.value,
        "createdAt": _iso(b.created_at),
        "updatedAt": _iso(b.updated_at),
    }


def load_seed(
    path: Union[str, Path],
) -> Tuple[Tuple[Transaction, ...], Tuple[Budget, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    transactions = tuple(transaction_from_dict(t) for t in data.get("transactions", []))
    budgets = tuple(budget_from_dict(b) for b in data.get("budgets", []))

    logger.info(
        "Loaded %d transactions and %d budgets from %s",
        len(transactions), len(budgets), path,
    )
    return transactions, budgets


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return trans + (t,)


def replace_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return tuple(t if existing.id == t.id else existing for existing in trans)


def remove_transaction(
    trans: Tuple[Transaction, ...], tx_id: str
) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.id != tx_id, trans))


def add_budget(budgets: Tuple[Budget, ...], b: Budget) -> Tuple[Budget, ...]:
    return budgets + (b,)


def replace_budget(budgets: Tuple[Budget, ...], b: Budget) -> Tuple[Budget, ...]:
    return tuple(b if existing.id == b.id else existing for existing in budgets)


def remove_budget(budgets: Tuple[Budget, ...], budget_id: str) -> Tuple[Budget, ...]:
    return tuple(filter(lambda b: b.id != budget_id, budgets))
