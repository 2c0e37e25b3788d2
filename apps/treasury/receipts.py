"""Receipt data for dues operations."""
from datetime import date
from decimal import Decimal
from typing import Optional

from django.utils import timezone

from apps.common.money import ZERO, format_money
from apps.receipts.composer import ReceiptData

from .allocation import AllocationPlan
from .entries import LedgerEntry
from .fiscal import FiscalYearWindow, month_label
from .strategies import BulkPlan


def _member_fields(member) -> dict:
    return {
        "member_name": member.full_name,
        "member_degree": member.get_degree_display() if member.degree else None,
        "member_phone": member.phone or None,
    }


def _note_line(notes: Optional[str]):
    return [f"Note: {notes}"] if notes else []


def receipt_for_allocation(
    member, plan: AllocationPlan, paid_at: date, notes: Optional[str] = None
) -> ReceiptData:
    details = []
    if plan.is_distributed:
        for item in plan:
            suffix = " (partial)" if item.is_partial(plan.monthly_fee) else ""
            details.append(f"{item.label}: {format_money(item.resulting_amount)}{suffix}")
        concept = f"Dues payment distribution - {plan.slot_count} months"
    else:
        concept = f"Monthly dues - {month_label(plan.target_month, plan.target_year)}"
    if plan.unallocated > 0:
        details.append(f"Not applied (fiscal year fully paid): {format_money(plan.unallocated)}")
    details.extend(_note_line(notes))

    remaining = ZERO
    if not plan.is_distributed and plan.allocations:
        remaining = plan.monthly_fee - plan.allocations[0].resulting_amount
    return ReceiptData(
        concept=concept,
        total_amount=plan.lump_sum,
        amount_paid=plan.total_applied,
        payment_date=paid_at,
        remaining=max(remaining, ZERO),
        details=details,
        **_member_fields(member),
    )


def receipt_for_edit(member, entry: LedgerEntry, monthly_fee: Decimal) -> ReceiptData:
    remaining = monthly_fee - entry.amount if entry.amount < monthly_fee else ZERO
    return ReceiptData(
        concept=f"Monthly dues - {month_label(entry.month, entry.year)}",
        total_amount=monthly_fee,
        amount_paid=entry.amount,
        payment_date=entry.paid_at or timezone.localdate(),
        remaining=remaining,
        details=_note_line(entry.notes),
        **_member_fields(member),
    )


def receipt_for_quick_pay(member, plan: BulkPlan, window: FiscalYearWindow) -> ReceiptData:
    benefit = plan.benefit
    covered = f"{plan.month_count} + 1 free" if benefit else str(plan.month_count)
    details = [
        f"Lodge year: {window.label}",
        f"Months covered: {covered}",
        f"Amount per month: {format_money(plan.per_month_amount)}",
    ]
    for entry in plan.paid_entries:
        details.append(f"{month_label(entry.month, entry.year)}: {format_money(entry.amount)}")
    if benefit:
        details.append(f"{month_label(benefit.month, benefit.year)}: {format_money(ZERO)} (quick pay)")
    return ReceiptData(
        concept=f"Quick pay - Lodge year {window.label}",
        total_amount=plan.total_charged,
        amount_paid=plan.total_charged,
        payment_date=plan.paid_at,
        details=details,
        **_member_fields(member),
    )


def receipt_for_advance_pay(member, plan: BulkPlan) -> ReceiptData:
    details = [
        f"Months paid: {plan.month_count}",
        f"Amount per month: {format_money(plan.per_month_amount)}",
    ]
    for entry in plan.entries:
        details.append(f"{month_label(entry.month, entry.year)}: {format_money(entry.amount)}")
    return ReceiptData(
        concept=f"Advance payment - {plan.month_count} months",
        total_amount=plan.total_charged,
        amount_paid=plan.total_charged,
        payment_date=plan.paid_at,
        details=details,
        **_member_fields(member),
    )
