"""Fiscal (lodge) year calendar.

The lodge year runs July through June. Slots inside a year are addressed by a
fiscal index 0..11, where 0 is July of the opening calendar year and 11 is
June of the closing one.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterator, Tuple

FISCAL_START_MONTH = 7
MONTHS_PER_YEAR = 12

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def month_year_for_index(fiscal_index: int, current_year: int, next_year: int) -> Tuple[int, int]:
    if not isinstance(fiscal_index, int) or isinstance(fiscal_index, bool):
        raise IndexError(f"Fiscal index must be an int, got {fiscal_index!r}")
    if fiscal_index < 0 or fiscal_index >= MONTHS_PER_YEAR:
        raise IndexError(f"Fiscal index out of range: {fiscal_index}")
    month = (FISCAL_START_MONTH - 1 + fiscal_index) % MONTHS_PER_YEAR + 1
    year = current_year if month >= FISCAL_START_MONTH else next_year
    return month, year


def month_label(month: int, year: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


@dataclass(frozen=True)
class FiscalYearWindow:
    current_year: int
    next_year: int

    @classmethod
    def for_date(cls, today: date) -> "FiscalYearWindow":
        start = today.year if today.month >= FISCAL_START_MONTH else today.year - 1
        return cls(current_year=start, next_year=start + 1)

    @classmethod
    def containing(cls, month: int, year: int) -> "FiscalYearWindow":
        if month < 1 or month > MONTHS_PER_YEAR:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        return cls.for_date(date(year, month, 1))

    @classmethod
    def starting(cls, year: int) -> "FiscalYearWindow":
        return cls(current_year=year, next_year=year + 1)

    @property
    def label(self) -> str:
        return f"{self.current_year}-{self.next_year}"

    def month_year(self, fiscal_index: int) -> Tuple[int, int]:
        return month_year_for_index(fiscal_index, self.current_year, self.next_year)

    def slots(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(fiscal_index, month, year)`` in chronological order."""
        for index in range(MONTHS_PER_YEAR):
            month, year = self.month_year(index)
            yield index, month, year

    def contains(self, month: int, year: int) -> bool:
        if month >= FISCAL_START_MONTH:
            return year == self.current_year and month <= MONTHS_PER_YEAR
        return year == self.next_year and month >= 1

    def index_of(self, month: int, year: int) -> int:
        if not self.contains(month, year):
            raise ValueError(f"{month:02d}/{year} is outside fiscal year {self.label}")
        return (month - FISCAL_START_MONTH) % MONTHS_PER_YEAR


def index_for_month_year(month: int, year: int, window: FiscalYearWindow) -> int:
    return window.index_of(month, year)
