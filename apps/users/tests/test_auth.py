import pytest

pytestmark = pytest.mark.django_db


def test_me_reports_treasury_role(admin_client, treasurer, member):
    treasurer.member = member
    treasurer.save()
    body = admin_client.get("/api/auth/me").json()
    assert body["username"] == "treasurer"
    assert body["member_id"] == member.pk
    assert body["is_treasury_admin"] is True


def test_viewer_is_not_treasury_admin(viewer_client):
    assert viewer_client.get("/api/auth/me").json()["is_treasury_admin"] is False


def test_jwt_token_pair(api_client, treasurer):
    response = api_client.post(
        "/api/auth/jwt/token", {"username": "treasurer", "password": "pw-123456"}, format="json"
    )
    assert response.status_code == 200
    access = response.json()["access"]
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    assert api_client.get("/api/auth/me").status_code == 200
