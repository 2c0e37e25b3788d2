from decimal import Decimal

import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def treasurer(django_user_model):
    return django_user_model.objects.create_user(
        username="treasurer", password="pw-123456", email="treasurer@example.com", is_treasurer=True
    )


@pytest.fixture
def viewer(django_user_model):
    return django_user_model.objects.create_user(
        username="viewer", password="pw-123456", email="viewer@example.com"
    )


@pytest.fixture
def admin_client(api_client, treasurer):
    api_client.force_authenticate(user=treasurer)
    return api_client


@pytest.fixture
def viewer_client(api_client, viewer):
    api_client.force_authenticate(user=viewer)
    return api_client


@pytest.fixture
def member(db):
    from apps.members.models import Member

    return Member.objects.create(full_name="Hiram Abiff", degree=Member.Degree.MASTER, phone="555-0101")


@pytest.fixture
def fee_settings():
    from apps.organization.services import FeeSettings

    return FeeSettings(monthly_fee_base=Decimal("50.00"), institution_name="Test Lodge")


@pytest.fixture
def org_settings(db):
    from apps.organization.models import OrganizationSettings

    return OrganizationSettings.objects.create(
        institution_name="Test Lodge", monthly_fee_base=Decimal("50.00")
    )
