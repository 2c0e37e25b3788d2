"""Distribution of a single dues payment across the fiscal year.

Money is applied oldest-first: months before the clicked one are completed
first, then the clicked month, then any surplus spills forward. Whatever is
left after the last month is reported but never stored.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from .entries import ZERO, LedgerEntry, RegularEntry
from .exceptions import ValidationError
from .fiscal import MONTHS_PER_YEAR, month_label
from .ledger import DuesLedger


@dataclass(frozen=True)
class SlotAllocation:
    fiscal_index: int
    month: int
    year: int
    applied: Decimal
    resulting_amount: Decimal
    existing: Optional[LedgerEntry] = None

    @property
    def is_creation(self) -> bool:
        return self.existing is None

    @property
    def label(self) -> str:
        return month_label(self.month, self.year)

    def is_partial(self, monthly_fee: Decimal) -> bool:
        return self.resulting_amount < monthly_fee


@dataclass
class AllocationPlan:
    member_id: int
    target_index: int
    target_month: int
    target_year: int
    lump_sum: Decimal
    monthly_fee: Decimal
    allocations: List[SlotAllocation] = field(default_factory=list)
    unallocated: Decimal = ZERO

    def __iter__(self):
        return iter(self.allocations)

    def __len__(self) -> int:
        return len(self.allocations)

    @property
    def total_applied(self) -> Decimal:
        return sum((item.applied for item in self.allocations), ZERO)

    @property
    def slot_count(self) -> int:
        return len(self.allocations)

    @property
    def is_distributed(self) -> bool:
        return self.slot_count > 1

    @property
    def needs_second_receipt(self) -> bool:
        # one uploaded image cannot stand for several physical receipts
        return self.is_distributed

    def allocation_for(self, month: int, year: int) -> Optional[SlotAllocation]:
        for item in self.allocations:
            if item.month == month and item.year == year:
                return item
        return None

    def is_target(self, item: SlotAllocation) -> bool:
        return item.month == self.target_month and item.year == self.target_year


def check_lump_sum(lump_sum: Decimal, monthly_fee: Decimal) -> None:
    if lump_sum is None or lump_sum <= 0:
        raise ValidationError("Payment amount must be greater than zero")
    if monthly_fee is None or monthly_fee <= 0:
        raise ValidationError("Monthly fee must be greater than zero")


def _fill(
    ledger: DuesLedger,
    indices,
    remaining: Decimal,
    monthly_fee: Decimal,
    plan: AllocationPlan,
) -> Decimal:
    for index in indices:
        if remaining <= 0:
            break
        existing = ledger.entry_at(index)
        if existing is not None and existing.is_settled(monthly_fee):
            continue
        current = existing.amount if existing is not None else ZERO
        apply = min(remaining, monthly_fee - current)
        remaining -= apply
        month, year = ledger.window.month_year(index)
        plan.allocations.append(
            SlotAllocation(
                fiscal_index=index,
                month=month,
                year=year,
                applied=apply,
                resulting_amount=current + apply,
                existing=existing,
            )
        )
    return remaining


def allocate_payment(
    ledger: DuesLedger,
    target_index: int,
    lump_sum: Decimal,
    monthly_fee: Decimal,
) -> AllocationPlan:
    """Spread ``lump_sum`` over the ledger, starting from the oldest debt.

    Only valid for an empty target slot; an occupied slot is edited with
    :func:`edit_entry` instead.
    """
    check_lump_sum(lump_sum, monthly_fee)
    target_month, target_year = ledger.window.month_year(target_index)
    if ledger.entry_at(target_index) is not None:
        raise ValidationError(
            f"{month_label(target_month, target_year)} already has a payment; edit it instead"
        )

    plan = AllocationPlan(
        member_id=ledger.member_id,
        target_index=target_index,
        target_month=target_month,
        target_year=target_year,
        lump_sum=lump_sum,
        monthly_fee=monthly_fee,
    )
    remaining = _fill(ledger, range(target_index), lump_sum, monthly_fee, plan)

    if remaining > 0:
        apply = min(remaining, monthly_fee)
        remaining -= apply
        plan.allocations.append(
            SlotAllocation(
                fiscal_index=target_index,
                month=target_month,
                year=target_year,
                applied=apply,
                resulting_amount=apply,
            )
        )

    remaining = _fill(
        ledger, range(target_index + 1, MONTHS_PER_YEAR), remaining, monthly_fee, plan
    )
    plan.unallocated = remaining
    return plan


def target_slot(ledger: DuesLedger, month: int, year: int) -> Tuple[int, Optional[LedgerEntry]]:
    try:
        index = ledger.window.index_of(month, year)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    return index, ledger.entry_at(index)


def edit_entry(
    entry: LedgerEntry,
    amount: Decimal,
    paid_at: Optional[date] = None,
    notes: Optional[str] = None,
    receipt: Optional[str] = None,
) -> LedgerEntry:
    """Replace one entry's fields in place of redistributing money.

    The edited entry becomes a regular payment; its neighbours are untouched.
    """
    if amount is None or amount < 0:
        raise ValidationError("Amount cannot be negative")
    return RegularEntry(
        member_id=entry.member_id,
        month=entry.month,
        year=entry.year,
        amount=amount,
        paid_at=paid_at if paid_at is not None else entry.paid_at,
        notes=notes if notes is not None else entry.notes,
        receipt=receipt if receipt is not None else entry.receipt,
        id=entry.id,
    )
