from datetime import date, datetime

from finance_core.domain import Window
from finance_core.periods import (
    current_window,
    days_in_month,
    previous_window,
    shift_window,
    trailing_months,
)


def test_current_window():
    assert current_window(datetime(2025, 7, 14, 12, 30)) == Window(month=7, year=2025)


def test_previous_window_same_year():
    assert previous_window(date(2025, 7, 1)) == Window(month=6, year=2025)


def test_previous_window_wraps_year():
    assert previous_window(date(2025, 1, 15)) == Window(month=12, year=2024)


def test_shift_window_both_directions():
    assert shift_window(Window(1, 2025), -1) == Window(12, 2024)
    assert shift_window(Window(11, 2025), 3) == Window(2, 2026)
    assert shift_window(Window(5, 2025), -17) == Window(12, 2023)


def test_days_in_month():
    assert days_in_month(Window(2, 2024)) == 29
    assert days_in_month(Window(2, 2025)) == 28
    assert days_in_month(Window(12, 2025)) == 31


def test_trailing_months_oldest_first_across_year():
    slots = list(trailing_months(date(2025, 2, 10), 4))
    assert [s.key for s in slots] == ["2024-11", "2024-12", "2025-01", "2025-02"]
    assert slots[0].label == "Nov 2024"
    assert slots[-1].window == Window(2, 2025)


def test_trailing_months_is_restartable():
    months = trailing_months(date(2025, 6, 1), 6)
    first = [s.key for s in months]
    second = [s.key for s in months]
    assert first == second
    assert len(months) == 6


def test_trailing_months_non_positive_count():
    assert list(trailing_months(date(2025, 6, 1), 0)) == []
    assert list(trailing_months(date(2025, 6, 1), -3)) == []
