"""Data handed to the receipt renderer (PDF / messaging live elsewhere)."""
from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from apps.common.money import ZERO


@dataclass
class ReceiptData:
    member_name: str
    concept: str
    total_amount: Decimal
    amount_paid: Decimal
    payment_date: date
    member_degree: Optional[str] = None
    member_phone: Optional[str] = None
    remaining: Decimal = ZERO
    details: List[str] = field(default_factory=list)
    receipt_number: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)
