from typing import Callable, Iterable, Iterator

from finance_core.domain import Category, Transaction, TransactionType, Window


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def by_type(type_: TransactionType):
    wanted = TransactionType(type_)

    def _filter(t: Transaction) -> bool:
        return t.type == wanted

    return _filter


def by_category(category: Category):
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def in_window(window: Window):
    def _filter(t: Transaction) -> bool:
        return window.contains(t.date)

    return _filter


def above(threshold: float):
    def _filter(t: Transaction) -> bool:
        return t.amount > threshold

    return _filter
