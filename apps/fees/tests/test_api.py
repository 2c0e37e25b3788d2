from decimal import Decimal

import pytest

from apps.fees.models import DegreeFee, ExtraordinaryFee, ExtraordinaryPayment
from apps.members.models import Member

pytestmark = pytest.mark.django_db


def test_expense_crud_and_filter(admin_client):
    response = admin_client.post(
        "/api/fees/expenses/",
        {"description": "Candles", "amount": "12.50", "category": "supplies", "expense_date": "2025-09-01"},
        format="json",
    )
    assert response.status_code == 201
    admin_client.post(
        "/api/fees/expenses/",
        {"description": "Rent", "amount": "300", "expense_date": "2025-10-01"},
        format="json",
    )
    listed = admin_client.get("/api/fees/expenses/", {"date_from": "2025-09-15"}).json()
    assert [e["description"] for e in listed] == ["Rent"]


def test_expense_requires_positive_amount(admin_client):
    response = admin_client.post(
        "/api/fees/expenses/",
        {"description": "Nothing", "amount": "0", "expense_date": "2025-09-01"},
        format="json",
    )
    assert response.status_code == 400


def test_extraordinary_fee_totals(admin_client, member):
    Member.objects.create(full_name="Second Brother")
    fee = ExtraordinaryFee.objects.create(name="Roof", amount_per_member=Decimal("100"))
    ExtraordinaryPayment.objects.create(fee=fee, member=member, amount_paid=Decimal("60"))

    body = admin_client.get(f"/api/fees/extraordinary/{fee.pk}/").json()
    assert Decimal(body["collected"]) == Decimal("60")
    assert Decimal(body["expected"]) == Decimal("200")
    assert Decimal(body["pending"]) == Decimal("140")


def test_extraordinary_payment_issues_receipt_number(admin_client, member):
    fee = ExtraordinaryFee.objects.create(name="Banquet", amount_per_member=Decimal("25"))
    response = admin_client.post(
        "/api/fees/extraordinary-payments/",
        {
            "fee_id": fee.pk,
            "member_id": member.pk,
            "amount_paid": "25",
            "payment_date": "2025-11-02",
            "issue_receipt_number": True,
        },
        format="json",
    )
    assert response.status_code == 201
    body = response.json()
    assert body["receipt_number"] == "EXT-0000001"
    assert body["member_name"] == "Hiram Abiff"


def test_degree_fee_without_member(admin_client):
    response = admin_client.post(
        "/api/fees/degree/",
        {"description": "Raising ceremony", "amount": "80", "fee_date": "2025-12-01"},
        format="json",
    )
    assert response.status_code == 201
    assert response.json()["member_name"] is None
    assert response.json()["receipt_number"] is None
    assert DegreeFee.objects.count() == 1


def test_degree_fee_receipt_number_assigned_once(admin_client, member):
    fee = DegreeFee.objects.create(
        member=member, description="Passing", amount=Decimal("40"), fee_date="2025-12-01"
    )
    url = f"/api/fees/degree/{fee.pk}/"
    first = admin_client.patch(url, {"issue_receipt_number": True}, format="json").json()
    second = admin_client.patch(url, {"issue_receipt_number": True}, format="json").json()
    assert first["receipt_number"] == "GRD-0000001"
    assert second["receipt_number"] == "GRD-0000001"


def test_viewer_cannot_record_fees(viewer_client):
    response = viewer_client.post(
        "/api/fees/expenses/",
        {"description": "x", "amount": "1", "expense_date": "2025-09-01"},
        format="json",
    )
    assert response.status_code == 403
