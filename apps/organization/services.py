from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from apps.common.money import to_money

from .models import OrganizationSettings


@dataclass(frozen=True)
class FeeSettings:
    """Immutable settings snapshot handed to the dues engine on every call."""

    monthly_fee_base: Decimal
    institution_name: str
    treasurer_id: Optional[int] = None

    def __post_init__(self):
        if self.monthly_fee_base <= 0:
            raise ValueError("monthly_fee_base must be greater than zero")


def get_fee_settings() -> FeeSettings:
    row = OrganizationSettings.load()
    return FeeSettings(
        monthly_fee_base=to_money(row.monthly_fee_base),
        institution_name=row.institution_name,
        treasurer_id=row.treasurer_id,
    )
