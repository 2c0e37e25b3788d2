from decimal import Decimal

import pytest

from apps.treasury.allocation import allocate_payment, edit_entry, target_slot
from apps.treasury.entries import QuickPayEntry, RegularEntry
from apps.treasury.exceptions import ValidationError

from .factories import FEE, benefit, ledger, regular


def _applied(plan):
    return [(item.fiscal_index, item.applied, item.resulting_amount) for item in plan]


def test_lump_sum_on_first_month_spills_forward():
    plan = allocate_payment(ledger(), 0, Decimal("120"), FEE)
    assert _applied(plan) == [
        (0, Decimal("50"), Decimal("50")),
        (1, Decimal("50"), Decimal("50")),
        (2, Decimal("20"), Decimal("20")),
    ]
    assert plan.unallocated == 0
    assert all(item.is_creation for item in plan)
    assert plan.allocations[2].is_partial(FEE)
    assert plan.is_distributed
    assert plan.needs_second_receipt


def test_partial_prior_month_is_completed_before_target():
    book = ledger(regular(0, "30"), regular(1, "50"))
    plan = allocate_payment(book, 2, Decimal("25"), FEE)
    assert _applied(plan) == [
        (0, Decimal("20"), Decimal("50")),
        (2, Decimal("5"), Decimal("5")),
    ]
    assert not plan.allocations[0].is_creation
    assert plan.allocations[0].existing.id == 100
    assert plan.is_target(plan.allocations[1])


def test_empty_prior_months_are_filled_first():
    plan = allocate_payment(ledger(), 4, Decimal("120"), FEE)
    assert [item.fiscal_index for item in plan] == [0, 1, 2]
    assert plan.allocation_for(plan.target_month, plan.target_year) is None


def test_every_prior_unpaid_month_gets_money_before_target_overflow():
    book = ledger(regular(1, "50"))
    plan = allocate_payment(book, 3, Decimal("160"), FEE)
    assert _applied(plan) == [
        (0, Decimal("50"), Decimal("50")),
        (2, Decimal("50"), Decimal("50")),
        (3, Decimal("50"), Decimal("50")),
        (4, Decimal("10"), Decimal("10")),
    ]


def test_benefit_and_paid_months_are_skipped():
    book = ledger(benefit(0), regular(1, "60"), regular(5, "10"))
    plan = allocate_payment(book, 3, Decimal("100"), FEE)
    assert _applied(plan) == [
        (2, Decimal("50"), Decimal("50")),
        (3, Decimal("50"), Decimal("50")),
    ]


def test_overflow_tops_up_later_partial_months():
    book = ledger(regular(1, "45"))
    plan = allocate_payment(book, 0, Decimal("60"), FEE)
    assert _applied(plan) == [
        (0, Decimal("50"), Decimal("50")),
        (1, Decimal("5"), Decimal("50")),
        (2, Decimal("5"), Decimal("5")),
    ]


def test_excess_beyond_year_is_unallocated():
    plan = allocate_payment(ledger(), 0, Decimal("700"), FEE)
    assert plan.slot_count == 12
    assert plan.total_applied == Decimal("600")
    assert plan.unallocated == Decimal("100")


@pytest.mark.parametrize("lump", ["0.01", "17.35", "50", "99.99", "275", "600", "1000"])
@pytest.mark.parametrize("target", [1, 3, 11])
def test_applied_money_is_conserved(lump, target):
    book = ledger(regular(0, "30"), regular(2, "50"), regular(7, "12.50"))
    lump = Decimal(lump)
    total_deficit = book.outstanding_balance(FEE)
    plan = allocate_payment(book, target, lump, FEE)
    assert plan.total_applied == min(lump, total_deficit)
    assert plan.total_applied + plan.unallocated == lump
    assert all(item.resulting_amount <= FEE for item in plan)


@pytest.mark.parametrize("amount", ["0", "-5"])
def test_non_positive_lump_sum_rejected(amount):
    with pytest.raises(ValidationError):
        allocate_payment(ledger(), 0, Decimal(amount), FEE)


def test_non_positive_fee_rejected():
    with pytest.raises(ValidationError):
        allocate_payment(ledger(), 0, Decimal("10"), Decimal("0"))


def test_occupied_target_rejected():
    with pytest.raises(ValidationError):
        allocate_payment(ledger(regular(0, "10")), 0, Decimal("10"), FEE)


def test_target_slot_outside_window():
    with pytest.raises(ValidationError):
        target_slot(ledger(), 7, 2026)


def test_edit_entry_replaces_amount_and_retags_regular():
    original = QuickPayEntry(
        member_id=1, month=8, year=2025, amount=Decimal("40"), notes="qp", batch_id="abc", id=7
    )
    edited = edit_entry(original, Decimal("10"))
    assert isinstance(edited, RegularEntry)
    assert edited.amount == Decimal("10")
    assert edited.notes == "qp"
    assert edited.id == 7
    assert edited.group_id == ""


def test_edit_entry_allows_zero_but_not_negative():
    original = regular(0, "50")
    assert edit_entry(original, Decimal("0")).amount == 0
    with pytest.raises(ValidationError):
        edit_entry(original, Decimal("-1"))
