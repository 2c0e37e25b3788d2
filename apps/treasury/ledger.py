"""Read-only snapshot of one member's dues ledger for a fiscal year."""
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .entries import ZERO, LedgerEntry, SlotKey
from .fiscal import MONTHS_PER_YEAR, FiscalYearWindow


def accumulated_paid(entries: Iterable[LedgerEntry]) -> Decimal:
    """Sum of recorded amounts, excluding quick-pay benefit months."""
    return sum((entry.paid_amount for entry in entries), ZERO)


class DuesLedger:
    def __init__(
        self,
        member_id: int,
        window: FiscalYearWindow,
        entries: Iterable[LedgerEntry] = (),
    ):
        self.member_id = member_id
        self.window = window
        self._entries: Dict[SlotKey, LedgerEntry] = {}
        for entry in entries:
            if entry.member_id != member_id:
                raise ValueError(
                    f"Entry for member {entry.member_id} in ledger of member {member_id}"
                )
            if not window.contains(entry.month, entry.year):
                continue
            if entry.key in self._entries:
                raise ValueError(f"Duplicate entry for slot {entry.key}")
            self._entries[entry.key] = entry

    def __repr__(self) -> str:
        return f"DuesLedger(member={self.member_id}, year={self.window.label}, entries={len(self._entries)})"

    def __iter__(self) -> Iterator[LedgerEntry]:
        for index, month, year in self.window.slots():
            entry = self.lookup(month, year)
            if entry is not None:
                yield entry

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Mapping[SlotKey, LedgerEntry]:
        return dict(self._entries)

    def key_for(self, month: int, year: int) -> SlotKey:
        return SlotKey(self.member_id, month, year)

    def lookup(self, month: int, year: int) -> Optional[LedgerEntry]:
        return self._entries.get(self.key_for(month, year))

    def entry_at(self, fiscal_index: int) -> Optional[LedgerEntry]:
        month, year = self.window.month_year(fiscal_index)
        return self.lookup(month, year)

    def empty_slots(self) -> List[Tuple[int, int, int]]:
        """Fiscal slots with no entry at all, as ``(index, month, year)``."""
        return [
            (index, month, year)
            for index, month, year in self.window.slots()
            if self.lookup(month, year) is None
        ]

    def deficit_at(self, fiscal_index: int, monthly_fee: Decimal) -> Decimal:
        entry = self.entry_at(fiscal_index)
        if entry is None:
            return monthly_fee
        return entry.deficit(monthly_fee)

    def outstanding_balance(self, monthly_fee: Decimal) -> Decimal:
        return sum(
            (self.deficit_at(index, monthly_fee) for index in range(MONTHS_PER_YEAR)),
            ZERO,
        )

    def accumulated_paid(self) -> Decimal:
        return accumulated_paid(self._entries.values())
