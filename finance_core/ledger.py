"""In-memory Ledger and Budget Registry.

Both hold an immutable tuple snapshot and swap it on every accepted change,
so a snapshot handed to the analytics is never modified afterwards. Rejected
changes come back as ``Left`` error dicts; nothing is raised for bad input.
"""
import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Tuple
from uuid import uuid4

from finance_core import transforms
from finance_core.domain import Budget, Transaction
from finance_core.events import (
    BUDGET_DELETED,
    BUDGET_SAVED,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    TRANSACTION_UPDATED,
    EventBus,
)
from finance_core.functional import (
    Either,
    Error,
    Left,
    Right,
    find_budget,
    find_transaction,
    parse_category,
    parse_period,
    parse_type,
    validate_budget,
    validate_transaction,
)

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid4().hex


class Ledger:
    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._transactions: Tuple[Transaction, ...] = tuple(transactions)
        self._bus = bus
        self._clock = clock or datetime.now
        self._new_id = id_factory

    def list_transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def get(self, tx_id: str) -> Optional[Transaction]:
        return find_transaction(self._transactions, tx_id)

    def _build(self, tx_id, amount, description, category, type_, on, created_at):
        now = self._clock()
        return parse_category(category).bind(
            lambda cat: parse_type(type_).map(
                lambda kind: Transaction(
                    id=tx_id,
                    amount=amount,
                    description=description.strip() if description else description,
                    category=cat,
                    type=kind,
                    date=on,
                    created_at=created_at or now,
                    updated_at=now,
                )
            )
        ).bind(validate_transaction)

    def add(
        self,
        amount: float,
        description: str,
        category,
        type_,
        on: date,
    ) -> Either[Error, Transaction]:
        result = self._build(self._new_id(), amount, description, category, type_, on, None)
        if result.is_left():
            logger.warning("Rejected transaction: %s", result.get_error()["message"])
            return result

        t = result.unwrap()
        self._transactions = transforms.add_transaction(self._transactions, t)
        logger.info("Added transaction %s (%s %.2f)", t.id, t.category.value, t.amount)
        self._notify(TRANSACTION_ADDED, t)
        return result

    def update(
        self,
        tx_id: str,
        amount: float,
        description: str,
        category,
        type_,
        on: date,
    ) -> Either[Error, Transaction]:
        """Replace every editable field of an existing transaction."""
        existing = self.get(tx_id)
        if existing is None:
            return _not_found("transaction_not_found", "Transaction", tx_id)

        result = self._build(tx_id, amount, description, category, type_, on, existing.created_at)
        if result.is_left():
            logger.warning("Rejected update of %s: %s", tx_id, result.get_error()["message"])
            return result

        t = result.unwrap()
        self._transactions = transforms.replace_transaction(self._transactions, t)
        logger.info("Updated transaction %s", tx_id)
        self._notify(TRANSACTION_UPDATED, t)
        return result

    def delete(self, tx_id: str) -> Either[Error, Transaction]:
        existing = self.get(tx_id)
        if existing is None:
            return _not_found("transaction_not_found", "Transaction", tx_id)

        self._transactions = transforms.remove_transaction(self._transactions, tx_id)
        logger.info("Deleted transaction %s", tx_id)
        self._notify(TRANSACTION_DELETED, existing)
        return Right(existing)

    def _notify(self, name: str, t: Transaction) -> None:
        if self._bus is not None:
            self._bus.publish(name, {"transaction": t})


class BudgetRegistry:
    """Budgets keyed by id, with at most one budget per expense category."""

    def __init__(
        self,
        budgets: Iterable[Budget] = (),
        bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._budgets: Tuple[Budget, ...] = tuple(budgets)
        self._bus = bus
        self._clock = clock or datetime.now
        self._new_id = id_factory

    def list_budgets(self) -> Tuple[Budget, ...]:
        return self._budgets

    def get(self, budget_id: str) -> Optional[Budget]:
        return find_budget(self._budgets, budget_id)

    def for_category(self, category) -> Optional[Budget]:
        return next((b for b in self._budgets if b.category == category), None)

    def _build(self, budget_id, category, amount, period, created_at):
        now = self._clock()
        return parse_category(category).bind(
            lambda cat: parse_period(period).map(
                lambda per: Budget(
                    id=budget_id,
                    category=cat,
                    amount=amount,
                    period=per,
                    created_at=created_at or now,
                    updated_at=now,
                )
            )
        ).bind(validate_budget).bind(self._unique_category)

    def _unique_category(self, b: Budget) -> Either[Error, Budget]:
        taken = self.for_category(b.category)
        if taken is not None and taken.id != b.id:
            return Left({
                "error": "budget_exists",
                "message": f"Budget for {b.category.display_name} already exists",
                "category": b.category.value,
                "budget_id": taken.id,
            })
        return Right(b)

    def add(self, category, amount: float, period) -> Either[Error, Budget]:
        result = self._build(self._new_id(), category, amount, period, None)
        if result.is_left():
            logger.warning("Rejected budget: %s", result.get_error()["message"])
            return result

        b = result.unwrap()
        self._budgets = transforms.add_budget(self._budgets, b)
        logger.info("Added budget %s for %s", b.id, b.category.value)
        self._notify(BUDGET_SAVED, b)
        return result

    def update(self, budget_id: str, category, amount: float, period) -> Either[Error, Budget]:
        existing = self.get(budget_id)
        if existing is None:
            return _not_found("budget_not_found", "Budget", budget_id)

        result = self._build(budget_id, category, amount, period, existing.created_at)
        if result.is_left():
            logger.warning("Rejected update of budget %s: %s", budget_id, result.get_error()["message"])
            return result

        b = result.unwrap()
        self._budgets = transforms.replace_budget(self._budgets, b)
        logger.info("Updated budget %s", budget_id)
        self._notify(BUDGET_SAVED, b)
        return result

    def delete(self, budget_id: str) -> Either[Error, Budget]:
        # transactions are never touched; the link is by category value only
        existing = self.get(budget_id)
        if existing is None:
            return _not_found("budget_not_found", "Budget", budget_id)

        self._budgets = transforms.remove_budget(self._budgets, budget_id)
        logger.info("Deleted budget %s", budget_id)
        self._notify(BUDGET_DELETED, existing)
        return Right(existing)

    def _notify(self, name: str, b: Budget) -> None:
        if self._bus is not None:
            self._bus.publish(name, {"budget": b})


def _not_found(code: str, kind: str, entity_id: str) -> Left:
    logger.warning("%s %s not found", kind, entity_id)
    return Left({
        "error": code,
        "message": f"{kind} with ID {entity_id} does not exist",
        "id": entity_id,
    })
