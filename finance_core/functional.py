from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, Optional, TypeVar

from finance_core.domain import (
    CATEGORY_TYPES,
    Budget,
    BudgetPeriod,
    Category,
    Transaction,
    TransactionType,
)

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Either(Generic[E, T], ABC):
    """Result of a ledger operation: ``Right(value)`` or ``Left(error)``."""

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self.bind(lambda value: Right(f(value)))

    def is_left(self) -> bool:
        return isinstance(self, Left)

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def unwrap(self) -> T:
        raise ValueError(f"{self!r} holds no value")

    def get_error(self) -> E:
        raise ValueError(f"{self!r} holds no error")


@dataclass(frozen=True)
class Right(Either[E, T]):
    value: T

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self.value)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Left(Either[E, T]):
    error: E

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_error(self) -> E:
        return self.error


Error = Dict[str, Any]


def find_transaction(trans: Iterable[Transaction], tx_id: str) -> Optional[Transaction]:
    return next((t for t in trans if t.id == tx_id), None)


def find_budget(budgets: Iterable[Budget], budget_id: str) -> Optional[Budget]:
    return next((b for b in budgets if b.id == budget_id), None)


def check_amount(amount: float) -> Either[Error, float]:
    if amount is None or amount <= 0:
        return Left({
            "error": "invalid_amount",
            "message": f"Amount must be positive, got {amount}",
            "amount": amount,
        })
    return Right(amount)


def _parse(enum_cls, value: Any, error: str) -> Either[Error, Any]:
    try:
        return Right(enum_cls(value))
    except ValueError:
        return Left({
            "error": error,
            "message": f"Unknown {enum_cls.__name__} value {value!r}",
            "value": value,
        })


def parse_category(value: Any) -> Either[Error, Category]:
    return _parse(Category, value, "invalid_category")


def parse_type(value: Any) -> Either[Error, TransactionType]:
    return _parse(TransactionType, value, "invalid_type")


def parse_period(value: Any) -> Either[Error, BudgetPeriod]:
    return _parse(BudgetPeriod, value, "invalid_period")


def validate_transaction(t: Transaction) -> Either[Error, Transaction]:
    """Boundary checks for a transaction before it enters the ledger.

    Checks run in order (amount, description, category/type match) and the
    first failure is returned as a ``Left`` error dict.
    """
    def description_ok(_) -> Either[Error, Transaction]:
        if not t.description or not t.description.strip():
            return Left({
                "error": "empty_description",
                "message": "Description is required",
            })
        return Right(t)

    def type_matches(_) -> Either[Error, Transaction]:
        if CATEGORY_TYPES[t.category] is not t.type:
            return Left({
                "error": "category_type_mismatch",
                "message": f"Category {t.category.display_name} cannot be used for {t.type.value} transactions",
                "category": t.category.value,
                "type": t.type.value,
            })
        return Right(t)

    return check_amount(t.amount).bind(description_ok).bind(type_matches)


def validate_budget(b: Budget) -> Either[Error, Budget]:
    def expense_only(_) -> Either[Error, Budget]:
        if CATEGORY_TYPES[b.category] is not TransactionType.EXPENSE:
            return Left({
                "error": "invalid_budget_category",
                "message": f"Budgets can only be set for expense categories, got {b.category.display_name}",
                "category": b.category.value,
            })
        return Right(b)

    return check_amount(b.amount).bind(expense_only)
