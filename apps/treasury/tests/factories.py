from decimal import Decimal

from apps.treasury.entries import QuickPayBenefitEntry, RegularEntry
from apps.treasury.fiscal import FiscalYearWindow
from apps.treasury.ledger import DuesLedger

FEE = Decimal("50.00")
MEMBER_ID = 1
WINDOW = FiscalYearWindow.starting(2025)


def regular(index, amount, member_id=MEMBER_ID, entry_id=None):
    month, year = WINDOW.month_year(index)
    return RegularEntry(
        member_id=member_id,
        month=month,
        year=year,
        amount=Decimal(amount),
        id=entry_id if entry_id is not None else 100 + index,
    )


def benefit(index, member_id=MEMBER_ID):
    month, year = WINDOW.month_year(index)
    return QuickPayBenefitEntry(
        member_id=member_id, month=month, year=year, amount=Decimal("0"), batch_id="g1", id=200 + index
    )


def ledger(*entries):
    return DuesLedger(MEMBER_ID, WINDOW, entries)
