from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.members.models import Member
from apps.receipts.models import ReceiptCounter
from apps.treasury.models import DuesEntry

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path


def test_grid_lists_active_members_with_twelve_cells(admin_client, member, org_settings):
    Member.objects.create(full_name="Gone Away", status=Member.Status.INACTIVE)
    DuesEntry.objects.create(member=member, month=7, year=2025, amount=Decimal("20"))

    response = admin_client.get("/api/treasury/grid", {"date": "2025-10-01"})

    assert response.status_code == 200
    body = response.json()
    assert body["fiscal_year"] == "2025-2026"
    assert len(body["months"]) == 12
    assert len(body["rows"]) == 1
    row = body["rows"][0]
    assert row["member"]["full_name"] == "Hiram Abiff"
    assert [cell["state"] for cell in row["cells"][:2]] == ["partial", "empty"]
    assert Decimal(row["outstanding"]) == Decimal("580")
    assert Decimal(row["accumulated"]) == Decimal("20")


def test_grid_rejects_bad_date(admin_client, org_settings):
    response = admin_client.get("/api/treasury/grid", {"date": "2025-13-40"})
    assert response.status_code == 400


def test_preview_returns_plan_without_writing(admin_client, member, org_settings):
    response = admin_client.post(
        "/api/treasury/payments/preview",
        {"member_id": member.pk, "month": 7, "year": 2025, "amount": "120"},
        format="json",
    )
    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "allocation"
    assert [a["applied"] for a in body["plan"]["allocations"]] == ["50.00", "50.00", "20.00"]
    assert not DuesEntry.objects.exists()


def test_payment_creates_entries_and_issues_receipt_number(admin_client, member, org_settings):
    response = admin_client.post(
        "/api/treasury/payments",
        {
            "member_id": member.pk,
            "month": 7,
            "year": 2025,
            "amount": "75",
            "paid_at": "2025-07-15",
            "notes": "first payment",
            "issue_receipt_number": True,
        },
        format="json",
    )
    assert response.status_code == 201
    body = response.json()
    assert body["kind"] == "allocation"
    assert body["report"]["status"] == "ok"
    assert body["receipt"]["receipt_number"] == "TSR-0000001"
    assert DuesEntry.objects.filter(member=member).count() == 2
    assert ReceiptCounter.objects.get(module="treasury").last_number == 1


def test_payment_with_receipt_upload(admin_client, member, org_settings):
    upload = SimpleUploadedFile("slip.png", b"fake-image", content_type="image/png")
    response = admin_client.post(
        "/api/treasury/payments",
        {"member_id": member.pk, "month": 7, "year": 2025, "amount": "50", "receipt": upload},
        format="multipart",
    )
    assert response.status_code == 201
    entry = DuesEntry.objects.get(member=member)
    assert entry.receipt.name.startswith("receipts/monthly/")


def test_payment_rejects_unsupported_receipt(admin_client, member, org_settings):
    upload = SimpleUploadedFile("slip.exe", b"x", content_type="application/octet-stream")
    response = admin_client.post(
        "/api/treasury/payments",
        {"member_id": member.pk, "month": 7, "year": 2025, "amount": "50", "receipt": upload},
        format="multipart",
    )
    assert response.status_code == 400


def test_payment_with_zero_amount_is_rejected(admin_client, member, org_settings):
    response = admin_client.post(
        "/api/treasury/payments",
        {"member_id": member.pk, "month": 7, "year": 2025, "amount": "0"},
        format="json",
    )
    assert response.status_code == 400
    assert not DuesEntry.objects.exists()


def test_payment_on_existing_month_edits(admin_client, member, org_settings):
    DuesEntry.objects.create(member=member, month=7, year=2025, amount=Decimal("20"))
    response = admin_client.post(
        "/api/treasury/payments",
        {"member_id": member.pk, "month": 7, "year": 2025, "amount": "35"},
        format="json",
    )
    assert response.status_code == 200
    assert response.json()["kind"] == "edit"
    assert DuesEntry.objects.get(member=member).amount == Decimal("35.00")


def test_payment_requires_treasury_role(viewer_client, member, org_settings):
    response = viewer_client.post(
        "/api/treasury/payments",
        {"member_id": member.pk, "month": 7, "year": 2025, "amount": "50"},
        format="json",
    )
    assert response.status_code == 403


def test_quick_pay_endpoint(admin_client, member, org_settings):
    response = admin_client.post(
        "/api/treasury/quick-pay",
        {"member_id": member.pk, "paid_at": "2025-08-01", "fiscal_year": 2025},
        format="json",
    )
    assert response.status_code == 201
    body = response.json()
    assert body["kind"] == "quick_pay"
    assert body["total_charged"] == "550.00"
    assert DuesEntry.objects.filter(member=member).count() == 12


def test_quick_pay_without_date_is_rejected(admin_client, member, org_settings):
    response = admin_client.post(
        "/api/treasury/quick-pay", {"member_id": member.pk, "fiscal_year": 2025}, format="json"
    )
    assert response.status_code == 400


def test_advance_pay_endpoint_and_conflict(admin_client, member, org_settings):
    payload = {
        "member_id": member.pk,
        "months": [{"month": 11, "year": 2025}, {"month": 12, "year": 2025}],
        "paid_at": "2025-10-01",
    }
    first = admin_client.post("/api/treasury/advance-pay", payload, format="json")
    assert first.status_code == 201

    second = admin_client.post("/api/treasury/advance-pay", payload, format="json")
    assert second.status_code == 409
    assert second.json()["report"]["status"] == "failed"


def test_advance_pay_with_no_months_is_rejected(admin_client, member, org_settings):
    response = admin_client.post(
        "/api/treasury/advance-pay",
        {"member_id": member.pk, "months": [], "paid_at": "2025-10-01"},
        format="json",
    )
    assert response.status_code == 400


def test_entry_patch_edits_single_month(admin_client, member, org_settings):
    entry = DuesEntry.objects.create(
        member=member, month=8, year=2025, amount=Decimal("50"),
        payment_type=DuesEntry.PaymentType.QUICK_PAY, group_id="batch",
    )
    response = admin_client.patch(
        f"/api/treasury/entries/{entry.pk}/", {"amount": "0", "notes": "refund"}, format="json"
    )
    assert response.status_code == 200
    entry.refresh_from_db()
    assert entry.amount == Decimal("0.00")
    assert entry.payment_type == "regular"
    assert entry.notes == "refund"


def test_entry_list_filters_by_group(admin_client, member, org_settings):
    DuesEntry.objects.create(member=member, month=8, year=2025, amount=Decimal("50"), group_id="a")
    DuesEntry.objects.create(member=member, month=9, year=2025, amount=Decimal("50"), group_id="b")
    response = admin_client.get("/api/treasury/entries/", {"group_id": "a"})
    assert response.status_code == 200
    assert [e["month"] for e in response.json()] == [8]


def test_viewer_can_read_but_not_delete_entries(viewer_client, member, org_settings):
    entry = DuesEntry.objects.create(member=member, month=8, year=2025, amount=Decimal("50"))
    assert viewer_client.get(f"/api/treasury/entries/{entry.pk}/").status_code == 200
    assert viewer_client.delete(f"/api/treasury/entries/{entry.pk}/").status_code == 403


def test_totals_and_export(admin_client, member, org_settings):
    DuesEntry.objects.create(member=member, month=8, year=2025, amount=Decimal("30"))
    totals = admin_client.get("/api/treasury/totals", {"year": 2025, "month": 8})
    assert totals.status_code == 200
    assert totals.json()["paid_sum"] == "30.00"
    assert totals.json()["expected_sum"] == "50.00"

    export = admin_client.get("/api/treasury/export", {"year": 2025, "month": 8})
    assert export.status_code == 200
    assert "Hiram Abiff" in export.content.decode()


def test_totals_keep_two_decimal_places(admin_client, member, org_settings):
    DuesEntry.objects.create(member=member, month=9, year=2025, amount=Decimal("30"))
    body = admin_client.get("/api/treasury/totals", {"year": 2025, "month": 9}).json()
    assert body["paid_sum"] == "30.00"
    assert body["paid_count"] == 1

    empty = admin_client.get("/api/treasury/totals", {"year": 2025, "month": 11}).json()
    assert empty["paid_sum"] == "0.00"
    assert empty["paid_count"] == 0
