from rest_framework.exceptions import APIException


class TreasuryError(APIException):
    status_code = 400
    default_detail = "Treasury operation failed"
    default_code = "treasury_error"


class ValidationError(TreasuryError):
    """Rejected input; raised before any store call."""

    status_code = 400
    default_detail = "Invalid payment request"
    default_code = "invalid"


class NoEligibleSlotsError(TreasuryError):
    status_code = 400
    default_detail = "No empty months left in the fiscal year"
    default_code = "no_eligible_slots"


class ConflictError(TreasuryError):
    """The slot was written by another session between snapshot and write."""

    status_code = 409
    default_detail = "A payment already exists for this member and month"
    default_code = "conflict"

    def __init__(self, detail=None, code=None, *, month=None, year=None):
        super().__init__(detail, code)
        self.month = month
        self.year = year


class StoreUnavailableError(TreasuryError):
    """Transient database failure; retry from a fresh snapshot."""

    status_code = 503
    default_detail = "Dues ledger temporarily unavailable"
    default_code = "store_unavailable"
