from django.urls import path
from rest_framework.routers import DefaultRouter

from apps.treasury.views import (
    AdvancePayView,
    DuesEntryViewSet,
    DuesExportView,
    DuesGridView,
    DuesTotalsView,
    PaymentCreateView,
    PaymentPreviewView,
    QuickPayView,
)

router = DefaultRouter()
router.register(r"treasury/entries", DuesEntryViewSet, basename="dues-entry")

urlpatterns = [
    path("treasury/grid", DuesGridView.as_view()),
    path("treasury/payments/preview", PaymentPreviewView.as_view()),
    path("treasury/payments", PaymentCreateView.as_view()),
    path("treasury/quick-pay", QuickPayView.as_view()),
    path("treasury/advance-pay", AdvancePayView.as_view()),
    path("treasury/totals", DuesTotalsView.as_view()),
    path("treasury/export", DuesExportView.as_view()),
]

urlpatterns += router.urls
