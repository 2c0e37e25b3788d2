from datetime import date
from decimal import Decimal

import pytest
from django.db import OperationalError

from apps.treasury.entries import QuickPayBenefitEntry, QuickPayEntry, RegularEntry
from apps.treasury.exceptions import ConflictError, StoreUnavailableError
from apps.treasury.fiscal import FiscalYearWindow
from apps.treasury.models import DuesEntry
from apps.treasury.store import DuesStore

pytestmark = pytest.mark.django_db

WINDOW = FiscalYearWindow.starting(2025)


def _entry(member, month, year, amount="50", cls=RegularEntry, **extra):
    return cls(member_id=member.pk, month=month, year=year, amount=Decimal(amount), **extra)


def test_insert_and_get_round_trip(member, treasurer):
    store = DuesStore(recorded_by=treasurer)
    saved = store.insert(_entry(member, 8, 2025, "30", paid_at=date(2025, 8, 1), notes="cash"))
    assert saved.id is not None
    assert store.get(member.pk, 8, 2025) == saved
    row = DuesEntry.objects.get(pk=saved.id)
    assert row.recorded_by == treasurer
    assert row.payment_type == "regular"


def test_insert_on_occupied_slot_raises_conflict(member):
    store = DuesStore()
    store.insert(_entry(member, 8, 2025))
    with pytest.raises(ConflictError) as exc_info:
        store.insert(_entry(member, 8, 2025, "10"))
    assert exc_info.value.month == 8
    assert exc_info.value.year == 2025
    assert DuesEntry.objects.count() == 1


def test_bulk_entries_keep_type_and_group(member):
    store = DuesStore()
    store.insert(_entry(member, 9, 2025, cls=QuickPayEntry, batch_id="grp"))
    store.insert(_entry(member, 10, 2025, "0", cls=QuickPayBenefitEntry, batch_id="grp"))
    ledger = store.snapshot(member.pk, WINDOW)
    assert isinstance(ledger.lookup(10, 2025), QuickPayBenefitEntry)
    assert {e.group_id for e in ledger} == {"grp"}


def test_snapshot_only_loads_the_window(member):
    store = DuesStore()
    store.insert(_entry(member, 6, 2025))
    store.insert(_entry(member, 7, 2025))
    store.insert(_entry(member, 6, 2026))
    store.insert(_entry(member, 7, 2026))
    ledger = store.snapshot(member.pk, WINDOW)
    assert sorted((e.year, e.month) for e in ledger) == [(2025, 7), (2026, 6)]


def test_update_changes_fields(member):
    store = DuesStore()
    saved = store.insert(_entry(member, 8, 2025, "20"))
    updated = store.update(saved.id, amount=Decimal("45"), notes="fixed")
    assert updated.amount == Decimal("45")
    assert updated.notes == "fixed"


def test_update_rejects_unknown_fields(member):
    store = DuesStore()
    saved = store.insert(_entry(member, 8, 2025))
    with pytest.raises(TypeError):
        store.update(saved.id, month=9)


def test_accumulated_paid_excludes_benefit(member):
    store = DuesStore()
    store.insert(_entry(member, 8, 2025, "50"))
    store.insert(_entry(member, 8, 2024, "25"))
    store.insert(_entry(member, 9, 2025, "0", cls=QuickPayBenefitEntry, batch_id="g"))
    assert store.accumulated_paid(member.pk) == Decimal("75")
    assert store.accumulated_paid_by_member([member.pk, 999]) == {
        member.pk: Decimal("75"),
        999: Decimal("0.00"),
    }


def test_database_errors_become_store_unavailable(member, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("database is locked")

    monkeypatch.setattr(DuesEntry.objects, "create", broken)
    with pytest.raises(StoreUnavailableError):
        DuesStore().insert(_entry(member, 8, 2025))
