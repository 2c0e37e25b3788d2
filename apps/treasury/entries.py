"""Ledger entry variants as seen by the dues engine.

Each dues slot (member, month, year) holds at most one entry. The concrete
class carries the payment type; only bulk entries carry a group id.
"""
import dataclasses
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import ClassVar, Dict, Optional, Type

REGULAR = "regular"
QUICK_PAY = "quick_pay"
QUICK_PAY_BENEFIT = "quick_pay_benefit"
ADVANCE_PAY = "advance_pay"

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class SlotKey:
    member_id: int
    month: int
    year: int


@dataclass(frozen=True)
class LedgerEntry:
    member_id: int
    month: int
    year: int
    amount: Decimal
    paid_at: Optional[date] = None
    notes: str = ""
    receipt: str = ""
    id: Optional[int] = None

    payment_type: ClassVar[str] = REGULAR
    counts_toward_paid: ClassVar[bool] = True

    def __post_init__(self):
        if self.month < 1 or self.month > 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if self.amount < 0:
            raise ValueError("Entry amount cannot be negative")

    @property
    def key(self) -> SlotKey:
        return SlotKey(self.member_id, self.month, self.year)

    @property
    def group_id(self) -> str:
        return ""

    @property
    def paid_amount(self) -> Decimal:
        return self.amount if self.counts_toward_paid else ZERO

    def deficit(self, monthly_fee: Decimal) -> Decimal:
        if not self.counts_toward_paid:
            return ZERO
        return max(ZERO, monthly_fee - self.amount)

    def is_settled(self, monthly_fee: Decimal) -> bool:
        return self.deficit(monthly_fee) == 0

    def replace(self, **changes) -> "LedgerEntry":
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class RegularEntry(LedgerEntry):
    payment_type: ClassVar[str] = REGULAR


@dataclass(frozen=True)
class BulkEntry(LedgerEntry):
    """Entry created by a bulk operation; ``batch_id`` links the batch."""

    batch_id: str = ""

    @property
    def group_id(self) -> str:
        return self.batch_id


@dataclass(frozen=True)
class QuickPayEntry(BulkEntry):
    payment_type: ClassVar[str] = QUICK_PAY


@dataclass(frozen=True)
class QuickPayBenefitEntry(BulkEntry):
    """The free month granted by quick-pay. Always zero, always settled."""

    payment_type: ClassVar[str] = QUICK_PAY_BENEFIT
    counts_toward_paid: ClassVar[bool] = False

    def __post_init__(self):
        super().__post_init__()
        if self.amount != 0:
            raise ValueError("A quick-pay benefit entry must have a zero amount")

    def is_settled(self, monthly_fee: Decimal) -> bool:
        return True


@dataclass(frozen=True)
class AdvancePayEntry(BulkEntry):
    payment_type: ClassVar[str] = ADVANCE_PAY


ENTRY_TYPES: Dict[str, Type[LedgerEntry]] = {
    cls.payment_type: cls
    for cls in (RegularEntry, QuickPayEntry, QuickPayBenefitEntry, AdvancePayEntry)
}


def build_entry(payment_type: str, *, group_id: str = "", **fields) -> LedgerEntry:
    try:
        cls = ENTRY_TYPES[payment_type]
    except KeyError as exc:
        raise ValueError(f"Unknown payment type: {payment_type!r}") from exc
    if issubclass(cls, BulkEntry):
        return cls(batch_id=group_id or "", **fields)
    return cls(**fields)
