from datetime import date

import pytest

from apps.treasury.fiscal import (
    FiscalYearWindow,
    index_for_month_year,
    month_label,
    month_year_for_index,
)


@pytest.mark.parametrize(
    "index,expected",
    [(0, (7, 2025)), (5, (12, 2025)), (6, (1, 2026)), (11, (6, 2026))],
)
def test_month_year_for_index(index, expected):
    assert month_year_for_index(index, 2025, 2026) == expected


def test_index_and_month_year_are_inverse():
    window = FiscalYearWindow.starting(2025)
    seen = set()
    for index in range(12):
        month, year = window.month_year(index)
        assert index_for_month_year(month, year, window) == index
        seen.add((month, year))
    assert len(seen) == 12


@pytest.mark.parametrize("bad", [-1, 12, True, "1", 1.0])
def test_month_year_for_index_rejects_bad_index(bad):
    with pytest.raises(IndexError):
        month_year_for_index(bad, 2025, 2026)


@pytest.mark.parametrize(
    "today,start",
    [
        (date(2025, 7, 1), 2025),
        (date(2025, 12, 31), 2025),
        (date(2026, 1, 1), 2025),
        (date(2026, 6, 30), 2025),
        (date(2026, 7, 1), 2026),
    ],
)
def test_window_for_date(today, start):
    assert FiscalYearWindow.for_date(today) == FiscalYearWindow.starting(start)


def test_window_containing_and_label():
    window = FiscalYearWindow.containing(3, 2026)
    assert window.label == "2025-2026"
    assert window.contains(7, 2025)
    assert window.contains(6, 2026)
    assert not window.contains(7, 2026)
    assert not window.contains(6, 2025)


def test_index_of_outside_window():
    with pytest.raises(ValueError):
        FiscalYearWindow.starting(2025).index_of(7, 2026)


def test_slots_are_chronological():
    slots = list(FiscalYearWindow.starting(2025).slots())
    assert slots[0] == (0, 7, 2025)
    assert slots[-1] == (11, 6, 2026)
    assert [(y, m) for _, m, y in slots] == sorted((y, m) for _, m, y in slots)


def test_month_label():
    assert month_label(7, 2025) == "July 2025"
