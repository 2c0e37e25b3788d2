from datetime import date
from decimal import Decimal

import pytest

from apps.receipts.composer import ReceiptData
from apps.receipts.services import format_receipt_number, next_receipt_number


def test_format_receipt_number():
    assert format_receipt_number("degree", 42) == "GRD-0000042"


@pytest.mark.django_db
def test_numbers_are_sequential_per_module():
    assert next_receipt_number("treasury") == "TSR-0000001"
    assert next_receipt_number("treasury") == "TSR-0000002"
    assert next_receipt_number("extraordinary") == "EXT-0000001"


@pytest.mark.django_db
def test_unknown_module_rejected():
    with pytest.raises(ValueError):
        next_receipt_number("bar")


@pytest.mark.django_db
def test_next_number_endpoint(admin_client):
    response = admin_client.post("/api/receipts/next-number", {"module": "degree"}, format="json")
    assert response.status_code == 201
    assert response.json() == {"module": "degree", "receipt_number": "GRD-0000001"}


@pytest.mark.django_db
def test_next_number_endpoint_validates_module(admin_client):
    response = admin_client.post("/api/receipts/next-number", {"module": "x"}, format="json")
    assert response.status_code == 400


def test_receipt_data_as_dict():
    data = ReceiptData(
        member_name="A",
        concept="Monthly dues - July 2025",
        total_amount=Decimal("50"),
        amount_paid=Decimal("20"),
        payment_date=date(2025, 7, 1),
        remaining=Decimal("30"),
    )
    assert data.as_dict()["remaining"] == Decimal("30")
    assert data.as_dict()["details"] == []
