"""Dues ledger store backed by the Django ORM.

Every write is issued on its own; a failed insert is isolated in a savepoint
so the writes before it stay in place.
"""
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Dict, Iterable, Optional

from django.db import IntegrityError, InterfaceError, OperationalError, transaction
from django.db.models import Q, Sum

from apps.common.money import ZERO

from .entries import LedgerEntry
from .exceptions import ConflictError, StoreUnavailableError
from .fiscal import FISCAL_START_MONTH, FiscalYearWindow, month_label
from .ledger import DuesLedger
from .models import DuesEntry

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"amount", "paid_at", "notes", "receipt", "payment_type", "group_id"}


def window_filter(window: FiscalYearWindow) -> Q:
    return Q(year=window.current_year, month__gte=FISCAL_START_MONTH) | Q(
        year=window.next_year, month__lt=FISCAL_START_MONTH
    )


@contextmanager
def _guard(month: Optional[int] = None, year: Optional[int] = None):
    try:
        yield
    except IntegrityError as exc:
        slot = month_label(month, year) if month and year else "this month"
        raise ConflictError(
            f"A payment for {slot} was recorded concurrently", month=month, year=year
        ) from exc
    except (OperationalError, InterfaceError) as exc:
        logger.warning("Dues store unavailable: %s", exc)
        raise StoreUnavailableError() from exc


class DuesStore:
    def __init__(self, recorded_by=None):
        self.recorded_by = recorded_by

    def get(self, member_id: int, month: int, year: int) -> Optional[LedgerEntry]:
        with _guard():
            row = DuesEntry.objects.filter(member_id=member_id, month=month, year=year).first()
        return row.to_ledger_entry() if row else None

    def get_by_id(self, entry_id: int) -> LedgerEntry:
        with _guard():
            return DuesEntry.objects.get(pk=entry_id).to_ledger_entry()

    def snapshot(self, member_id: int, window: FiscalYearWindow) -> DuesLedger:
        with _guard():
            rows = list(
                DuesEntry.objects.filter(window_filter(window), member_id=member_id)
            )
        return DuesLedger(member_id, window, [row.to_ledger_entry() for row in rows])

    def snapshots(self, member_ids: Iterable[int], window: FiscalYearWindow) -> Dict[int, DuesLedger]:
        member_ids = list(member_ids)
        grouped: Dict[int, list] = {member_id: [] for member_id in member_ids}
        with _guard():
            rows = DuesEntry.objects.filter(window_filter(window), member_id__in=member_ids)
            for row in rows:
                grouped[row.member_id].append(row.to_ledger_entry())
        return {
            member_id: DuesLedger(member_id, window, items)
            for member_id, items in grouped.items()
        }

    def insert(self, entry: LedgerEntry) -> LedgerEntry:
        with _guard(entry.month, entry.year):
            with transaction.atomic():
                row = DuesEntry.objects.create(
                    member_id=entry.member_id,
                    month=entry.month,
                    year=entry.year,
                    amount=entry.amount,
                    paid_at=entry.paid_at,
                    payment_type=entry.payment_type,
                    notes=entry.notes or None,
                    receipt=entry.receipt or None,
                    group_id=entry.group_id or None,
                    recorded_by=self.recorded_by,
                )
        return row.to_ledger_entry()

    def update(self, entry_id: int, **fields) -> LedgerEntry:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update dues entry fields: {sorted(unknown)}")
        with _guard():
            with transaction.atomic():
                try:
                    row = DuesEntry.objects.select_for_update().get(pk=entry_id)
                except DuesEntry.DoesNotExist as exc:
                    raise ConflictError(
                        f"Dues entry {entry_id} was removed before it could be updated"
                    ) from exc
                for name, value in fields.items():
                    if name in {"notes", "receipt", "group_id"}:
                        value = value or None
                    setattr(row, name, value)
                row.save(update_fields=[*fields, "updated_at"])
        return row.to_ledger_entry()

    def accumulated_paid(self, member_id: int) -> Decimal:
        return self.accumulated_paid_by_member([member_id]).get(member_id, ZERO)

    def accumulated_paid_by_member(self, member_ids: Iterable[int]) -> Dict[int, Decimal]:
        member_ids = list(member_ids)
        with _guard():
            totals = (
                DuesEntry.objects.filter(member_id__in=member_ids)
                .exclude(payment_type=DuesEntry.PaymentType.QUICK_PAY_BENEFIT)
                .order_by()
                .values("member_id")
                .annotate(total=Sum("amount"))
            )
            result = {row["member_id"]: row["total"] or ZERO for row in totals}
        return {member_id: result.get(member_id, ZERO) for member_id in member_ids}
