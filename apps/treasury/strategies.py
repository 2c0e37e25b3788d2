"""Bulk payment strategies: quick-pay and advance-pay."""
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from .entries import ZERO, AdvancePayEntry, BulkEntry, QuickPayBenefitEntry, QuickPayEntry
from .exceptions import NoEligibleSlotsError, ValidationError
from .ledger import DuesLedger

QUICK_PAY_PAID_MONTHS = 11
QUICK_PAY_NOTE = "Recorded via quick pay."
ADVANCE_PAY_NOTE = "Recorded via advance payment ({count} months)."


@dataclass
class BulkPlan:
    member_id: int
    group_id: str
    paid_at: date
    per_month_amount: Decimal
    entries: List[BulkEntry] = field(default_factory=list)

    @property
    def paid_entries(self) -> List[BulkEntry]:
        return [entry for entry in self.entries if entry.counts_toward_paid]

    @property
    def benefit(self) -> Optional[QuickPayBenefitEntry]:
        for entry in self.entries:
            if isinstance(entry, QuickPayBenefitEntry):
                return entry
        return None

    @property
    def total_charged(self) -> Decimal:
        return sum((entry.amount for entry in self.paid_entries), ZERO)

    @property
    def month_count(self) -> int:
        return len(self.paid_entries)


def new_group_id() -> str:
    return uuid.uuid4().hex


def _require_date(paid_at: Optional[date]) -> date:
    if paid_at is None:
        raise ValidationError("A payment date is required")
    return paid_at


def check_quick_pay_request(per_month_amount: Decimal, paid_at: Optional[date]) -> None:
    if per_month_amount is None or per_month_amount <= 0:
        raise ValidationError("Amount per month must be greater than zero")
    _require_date(paid_at)


def check_advance_pay_request(
    months: Iterable[Tuple[int, int]], monthly_fee: Decimal, paid_at: Optional[date]
) -> List[Tuple[int, int]]:
    """Validate an advance-pay selection and return it in chronological order."""
    selected = sorted({(int(month), int(year)) for month, year in months}, key=lambda s: (s[1], s[0]))
    if not selected:
        raise ValidationError("Select at least one month to pay in advance")
    for month, _year in selected:
        if month < 1 or month > 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
    if monthly_fee is None or monthly_fee <= 0:
        raise ValidationError("Monthly fee must be greater than zero")
    _require_date(paid_at)
    return selected


def plan_quick_pay(
    ledger: DuesLedger,
    per_month_amount: Decimal,
    paid_at: Optional[date],
    receipt: str = "",
    group_id: Optional[str] = None,
) -> BulkPlan:
    """Pay the first 11 empty months; a 12th empty month becomes free.

    Months that already hold any entry are skipped, partial ones included.
    """
    check_quick_pay_request(per_month_amount, paid_at)

    empty = ledger.empty_slots()
    if not empty:
        raise NoEligibleSlotsError(
            f"Every month of fiscal year {ledger.window.label} already has a payment"
        )

    plan = BulkPlan(
        member_id=ledger.member_id,
        group_id=group_id or new_group_id(),
        paid_at=paid_at,
        per_month_amount=per_month_amount,
    )
    common = dict(
        member_id=ledger.member_id,
        paid_at=paid_at,
        notes=QUICK_PAY_NOTE,
        receipt=receipt or "",
        batch_id=plan.group_id,
    )
    for _index, month, year in empty[:QUICK_PAY_PAID_MONTHS]:
        plan.entries.append(
            QuickPayEntry(month=month, year=year, amount=per_month_amount, **common)
        )
    if len(empty) > QUICK_PAY_PAID_MONTHS:
        _index, month, year = empty[QUICK_PAY_PAID_MONTHS]
        plan.entries.append(QuickPayBenefitEntry(month=month, year=year, amount=ZERO, **common))
    return plan


def plan_advance_pay(
    ledger: DuesLedger,
    months: Iterable[Tuple[int, int]],
    monthly_fee: Decimal,
    paid_at: Optional[date],
    receipt: str = "",
    group_id: Optional[str] = None,
) -> BulkPlan:
    """Charge the full fee for each chosen month. No free month.

    The caller picks empty months; occupancy is left to the store's
    uniqueness constraint.
    """
    selected = check_advance_pay_request(months, monthly_fee, paid_at)

    plan = BulkPlan(
        member_id=ledger.member_id,
        group_id=group_id or new_group_id(),
        paid_at=paid_at,
        per_month_amount=monthly_fee,
    )
    note = ADVANCE_PAY_NOTE.format(count=len(selected))
    for month, year in selected:
        plan.entries.append(
            AdvancePayEntry(
                member_id=ledger.member_id,
                month=month,
                year=year,
                amount=monthly_fee,
                paid_at=paid_at,
                notes=note,
                receipt=receipt or "",
                batch_id=plan.group_id,
            )
        )
    return plan
