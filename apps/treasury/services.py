"""Dues operations: snapshot the ledger, plan, then write slot by slot.

Nothing is written until a plan exists. Writes are not wrapped in one
transaction: a failure part-way leaves earlier slots applied and is reported
in the :class:`ApplyReport` so the caller can reload and tell the user.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from django.utils import timezone

from apps.organization.services import FeeSettings
from apps.receipts.composer import ReceiptData

from . import receipts
from .allocation import AllocationPlan, allocate_payment, check_lump_sum, edit_entry, target_slot
from .entries import LedgerEntry, RegularEntry
from .exceptions import ConflictError, StoreUnavailableError, ValidationError
from .fiscal import FiscalYearWindow
from .store import DuesStore
from .strategies import (
    BulkPlan,
    check_advance_pay_request,
    check_quick_pay_request,
    plan_advance_pay,
    plan_quick_pay,
)

logger = logging.getLogger(__name__)


@dataclass
class SlotResult:
    month: int
    year: int
    amount: Decimal
    status: str
    entry: Optional[LedgerEntry] = None
    error: str = ""

    APPLIED = "applied"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    SKIPPED = "skipped"


@dataclass
class ApplyReport:
    results: List[SlotResult] = field(default_factory=list)
    abandoned: bool = False

    @property
    def applied(self) -> List[SlotResult]:
        return [r for r in self.results if r.status == SlotResult.APPLIED]

    @property
    def failed(self) -> List[SlotResult]:
        return [r for r in self.results if r.status != SlotResult.APPLIED]

    @property
    def status(self) -> str:
        if not self.failed:
            return "ok"
        if not self.applied:
            return "failed"
        return "partial"

    @property
    def summary(self) -> str:
        return f"{len(self.applied)} of {len(self.results)} months saved"


@dataclass
class PaymentOutcome:
    kind: str
    report: ApplyReport
    receipt: ReceiptData
    plan: Optional[AllocationPlan] = None
    bulk: Optional[BulkPlan] = None

    EDIT = "edit"
    ALLOCATION = "allocation"
    QUICK_PAY = "quick_pay"
    ADVANCE_PAY = "advance_pay"


def _write_all(store: DuesStore, writes) -> ApplyReport:
    """Run ``(month, year, amount, callable)`` writes in order.

    Conflicts are recorded and skipped; an unavailable store abandons the rest.
    """
    report = ApplyReport()
    for month, year, amount, write in writes:
        if report.abandoned:
            report.results.append(SlotResult(month, year, amount, SlotResult.SKIPPED))
            continue
        try:
            entry = write()
        except ConflictError as exc:
            logger.warning("Dues slot %s/%s conflict: %s", month, year, exc)
            report.results.append(
                SlotResult(month, year, amount, SlotResult.CONFLICT, error=str(exc.detail))
            )
        except StoreUnavailableError as exc:
            logger.warning("Dues store unavailable at %s/%s; abandoning plan", month, year)
            report.abandoned = True
            report.results.append(
                SlotResult(month, year, amount, SlotResult.UNAVAILABLE, error=str(exc.detail))
            )
        else:
            report.results.append(SlotResult(month, year, amount, SlotResult.APPLIED, entry=entry))
    logger.info("Dues write finished: %s (%s)", report.summary, report.status)
    return report


def apply_plan(
    store: DuesStore,
    plan: AllocationPlan,
    paid_at: Optional[date],
    notes: str = "",
    receipt: str = "",
    second_receipt: str = "",
) -> ApplyReport:
    """Write an allocation plan. The clicked month gets the note and first receipt."""
    writes = []
    for item in plan:
        is_target = plan.is_target(item)
        item_receipt = receipt if is_target else (second_receipt or receipt)

        if item.existing is None:
            entry = RegularEntry(
                member_id=plan.member_id,
                month=item.month,
                year=item.year,
                amount=item.resulting_amount,
                paid_at=paid_at,
                notes=notes if is_target else "",
                receipt=item_receipt,
            )
            write = lambda entry=entry: store.insert(entry)  # noqa: E731
        else:
            fields = dict(amount=item.resulting_amount, paid_at=paid_at)
            if item_receipt:
                fields["receipt"] = item_receipt
            write = lambda pk=item.existing.id, fields=fields: store.update(pk, **fields)  # noqa: E731
        writes.append((item.month, item.year, item.resulting_amount, write))
    return _write_all(store, writes)


def apply_bulk(store: DuesStore, plan: BulkPlan) -> ApplyReport:
    writes = [
        (entry.month, entry.year, entry.amount, lambda entry=entry: store.insert(entry))
        for entry in plan.entries
    ]
    return _write_all(store, writes)


def _edit_report(entry: LedgerEntry) -> ApplyReport:
    return ApplyReport(
        results=[SlotResult(entry.month, entry.year, entry.amount, SlotResult.APPLIED, entry=entry)]
    )


def preview_payment(
    member_id: int,
    month: int,
    year: int,
    amount: Decimal,
    fee_settings: FeeSettings,
    store: Optional[DuesStore] = None,
) -> Optional[AllocationPlan]:
    """Plan a payment without writing. ``None`` when the slot would be edited."""
    check_lump_sum(amount, fee_settings.monthly_fee_base)
    store = store or DuesStore()
    ledger = store.snapshot(member_id, _window_for(month, year))
    index, existing = target_slot(ledger, month, year)
    if existing is not None:
        return None
    return allocate_payment(ledger, index, amount, fee_settings.monthly_fee_base)


def register_payment(
    member,
    month: int,
    year: int,
    amount: Decimal,
    fee_settings: FeeSettings,
    paid_at: Optional[date] = None,
    notes: str = "",
    receipt: str = "",
    second_receipt: str = "",
    store: Optional[DuesStore] = None,
) -> PaymentOutcome:
    """Record money against the clicked month.

    An empty month distributes the sum across the fiscal year; an occupied
    month is corrected in place.
    """
    fee = fee_settings.monthly_fee_base
    check_lump_sum(amount, fee)
    store = store or DuesStore()
    paid_at = paid_at or timezone.localdate()
    ledger = store.snapshot(member.pk, _window_for(month, year))
    index, existing = target_slot(ledger, month, year)

    if existing is not None:
        edited = edit_entry(existing, amount, paid_at, notes, receipt or None)
        saved = _save_edit(store, edited)
        logger.info("Edited dues entry %s for member %s", saved.id, member.pk)
        return PaymentOutcome(
            kind=PaymentOutcome.EDIT,
            report=_edit_report(saved),
            receipt=receipts.receipt_for_edit(member, saved, fee),
        )

    plan = allocate_payment(ledger, index, amount, fee)
    if plan.unallocated > 0:
        logger.info(
            "Member %s paid %s beyond the fiscal year obligation; not applied",
            member.pk,
            plan.unallocated,
        )
    report = apply_plan(store, plan, paid_at, notes, receipt, second_receipt)
    return PaymentOutcome(
        kind=PaymentOutcome.ALLOCATION,
        plan=plan,
        report=report,
        receipt=receipts.receipt_for_allocation(member, plan, paid_at, notes),
    )


def _save_edit(store: DuesStore, entry: LedgerEntry) -> LedgerEntry:
    return store.update(
        entry.id,
        amount=entry.amount,
        paid_at=entry.paid_at,
        notes=entry.notes,
        receipt=entry.receipt,
        payment_type=entry.payment_type,
        group_id=entry.group_id,
    )


def edit_dues_entry(
    member,
    entry_id: int,
    fee_settings: FeeSettings,
    amount: Decimal,
    paid_at: Optional[date] = None,
    notes: Optional[str] = None,
    receipt: Optional[str] = None,
    store: Optional[DuesStore] = None,
) -> PaymentOutcome:
    """Correct a single entry; no other month is touched."""
    if amount is None or amount < 0:
        raise ValidationError("Amount cannot be negative")
    store = store or DuesStore()
    current = store.get_by_id(entry_id)
    saved = _save_edit(store, edit_entry(current, amount, paid_at, notes, receipt))
    return PaymentOutcome(
        kind=PaymentOutcome.EDIT,
        report=_edit_report(saved),
        receipt=receipts.receipt_for_edit(member, saved, fee_settings.monthly_fee_base),
    )


def quick_pay(
    member,
    per_month_amount: Decimal,
    paid_at: Optional[date],
    receipt: str = "",
    window: Optional[FiscalYearWindow] = None,
    store: Optional[DuesStore] = None,
) -> PaymentOutcome:
    check_quick_pay_request(per_month_amount, paid_at)
    store = store or DuesStore()
    window = window or FiscalYearWindow.for_date(timezone.localdate())
    ledger = store.snapshot(member.pk, window)
    plan = plan_quick_pay(ledger, per_month_amount, paid_at, receipt)
    logger.info(
        "Quick pay for member %s: %s months, benefit=%s, group=%s",
        member.pk,
        plan.month_count,
        plan.benefit is not None,
        plan.group_id,
    )
    return PaymentOutcome(
        kind=PaymentOutcome.QUICK_PAY,
        bulk=plan,
        report=apply_bulk(store, plan),
        receipt=receipts.receipt_for_quick_pay(member, plan, window),
    )


def advance_pay(
    member,
    months: Iterable[Tuple[int, int]],
    fee_settings: FeeSettings,
    paid_at: Optional[date],
    receipt: str = "",
    store: Optional[DuesStore] = None,
) -> PaymentOutcome:
    fee = fee_settings.monthly_fee_base
    selected = check_advance_pay_request(months, fee, paid_at)
    store = store or DuesStore()
    first_month, first_year = selected[0]
    ledger = store.snapshot(member.pk, _window_for(first_month, first_year))
    plan = plan_advance_pay(ledger, selected, fee, paid_at, receipt)
    logger.info(
        "Advance pay for member %s: %s months, group=%s", member.pk, plan.month_count, plan.group_id
    )
    return PaymentOutcome(
        kind=PaymentOutcome.ADVANCE_PAY,
        bulk=plan,
        report=apply_bulk(store, plan),
        receipt=receipts.receipt_for_advance_pay(member, plan),
    )


def _window_for(month: int, year: int) -> FiscalYearWindow:
    try:
        return FiscalYearWindow.containing(month, year)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
