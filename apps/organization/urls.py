from django.urls import path

from .views import OrganizationSettingsView

urlpatterns = [
    path("organization/settings", OrganizationSettingsView.as_view()),
]
