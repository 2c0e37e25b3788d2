import pytest

from apps.members.models import Member

pytestmark = pytest.mark.django_db


def test_create_member(admin_client):
    response = admin_client.post(
        "/api/members/",
        {"full_name": "  Jacques de Molay ", "degree": "fellow", "phone": "555-0199"},
        format="json",
    )
    assert response.status_code == 201
    member = Member.objects.get()
    assert member.full_name == "Jacques de Molay"
    assert member.is_active
    assert member.first_name == "Jacques"


def test_blank_name_rejected(admin_client):
    response = admin_client.post("/api/members/", {"full_name": "   "}, format="json")
    assert response.status_code == 400


def test_filter_by_status_and_search(admin_client):
    Member.objects.create(full_name="Albert Pike")
    Member.objects.create(full_name="Elias Ashmole", status=Member.Status.INACTIVE)

    active = admin_client.get("/api/members/", {"status": "active"}).json()
    assert [m["full_name"] for m in active] == ["Albert Pike"]

    found = admin_client.get("/api/members/", {"search": "ashm"}).json()
    assert [m["full_name"] for m in found] == ["Elias Ashmole"]


def test_viewer_cannot_create_member(viewer_client):
    response = viewer_client.post("/api/members/", {"full_name": "Nobody"}, format="json")
    assert response.status_code == 403


def test_anonymous_is_rejected(api_client):
    assert api_client.get("/api/members/").status_code == 401
