import calendar
from datetime import date
from typing import Iterator

from finance_core.domain import MonthSlot, Window

MONTH_LABEL_FORMAT = "%b %Y"


def current_window(now: date) -> Window:
    return Window(month=now.month, year=now.year)


def previous_window(now: date) -> Window:
    if now.month == 1:
        return Window(month=12, year=now.year - 1)
    return Window(month=now.month - 1, year=now.year)


def shift_window(window: Window, offset: int) -> Window:
    """Move a window by ``offset`` months, wrapping across years in both directions."""
    index = window.year * 12 + (window.month - 1) + offset
    return Window(month=index % 12 + 1, year=index // 12)


def days_in_month(window: Window) -> int:
    return calendar.monthrange(window.year, window.month)[1]


def month_slot(window: Window) -> MonthSlot:
    label = date(window.year, window.month, 1).strftime(MONTH_LABEL_FORMAT)
    return MonthSlot(key=window.key, label=label, window=window)


class TrailingMonths:
    """The ``count`` most recent months ending at the month of ``now``, oldest first.

    Iteration is lazy and can be repeated; every pass yields the same slots.
    """

    def __init__(self, now: date, count: int):
        self._end = current_window(now)
        self._count = max(0, count)

    def __iter__(self) -> Iterator[MonthSlot]:
        for offset in range(self._count - 1, -1, -1):
            yield month_slot(shift_window(self._end, -offset))

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"TrailingMonths(end={self._end.key}, count={self._count})"


def trailing_months(now: date, count: int) -> TrailingMonths:
    return TrailingMonths(now, count)
