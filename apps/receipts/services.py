import logging

from django.db import transaction

from .models import ReceiptCounter

logger = logging.getLogger(__name__)

PREFIXES = {
    ReceiptCounter.Module.TREASURY: "TSR",
    ReceiptCounter.Module.EXTRAORDINARY: "EXT",
    ReceiptCounter.Module.DEGREE: "GRD",
}
NUMBER_WIDTH = 7


def format_receipt_number(module: str, number: int) -> str:
    return f"{PREFIXES[module]}-{number:0{NUMBER_WIDTH}d}"


def next_receipt_number(module: str) -> str:
    """Reserve and return the next receipt number for ``module``.

    Numbers are never reused, even when the receipt is not printed.
    """
    if module not in PREFIXES:
        raise ValueError(f"Unknown receipt module: {module!r}")
    with transaction.atomic():
        counter, _ = ReceiptCounter.objects.select_for_update().get_or_create(module=module)
        counter.last_number += 1
        counter.save(update_fields=["last_number", "updated_at"])
    number = format_receipt_number(module, counter.last_number)
    logger.info("Issued receipt number %s", number)
    return number
