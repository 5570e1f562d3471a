import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional

from finance_core.budgets import analyze
from finance_core.domain import Transaction, TransactionType
from finance_core.lazy import by_category, iter_transactions
from finance_core.periods import current_window

__all__ = [
    'Event', 'EventBus',
    'TRANSACTION_ADDED', 'TRANSACTION_UPDATED', 'TRANSACTION_DELETED',
    'BUDGET_SAVED', 'BUDGET_DELETED', 'BUDGET_ALERT',
    'watch_budgets',
]

logger = logging.getLogger(__name__)

TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_UPDATED = "TRANSACTION_UPDATED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
BUDGET_SAVED = "BUDGET_SAVED"
BUDGET_DELETED = "BUDGET_DELETED"
BUDGET_ALERT = "BUDGET_ALERT"

ALERT_ABOVE = 80.0


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = list(self._subscribers.get(name, []))
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("Publishing %s to %d handler(s)", name, len(handlers))
        return [handler(event, payload) for handler in handlers]


def watch_budgets(
    bus: EventBus,
    ledger,
    registry,
    clock: Optional[Callable[[], datetime]] = None,
) -> Handler:
    """Re-check the budget of a touched expense category after each ledger change.

    Publishes ``BUDGET_ALERT`` when the category's usage for the current month
    is above the warning level. Returns the subscribed handler so callers can
    unsubscribe it.
    """
    clock = clock or datetime.now

    def handler(event: Event, payload: dict) -> dict:
        t: Optional[Transaction] = payload.get("transaction")
        if t is None or t.type is not TransactionType.EXPENSE:
            return {}

        budget = registry.for_category(t.category)
        if budget is None:
            return {}

        spending = iter_transactions(ledger.list_transactions(), by_category(t.category))
        (row,) = analyze(spending, (budget,), current_window(clock()))
        if row.percentage <= ALERT_ABOVE:
            return {"category": row.category.value, "percentage": row.percentage}

        alert = {
            "alert": f"Budget for {row.category.display_name} at {row.percentage:.0f}%",
            "category": row.category.value,
            "spent": row.actual_amount,
            "budget": row.budget_amount,
            "percentage": row.percentage,
            "is_over": row.percentage > 100,
        }
        logger.info(alert["alert"])
        bus.publish(BUDGET_ALERT, alert)
        return alert

    for name in (TRANSACTION_ADDED, TRANSACTION_UPDATED, TRANSACTION_DELETED):
        bus.subscribe(name, handler)
    return handler
