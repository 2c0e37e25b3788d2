from django.urls import path

from .views import NextReceiptNumberView

urlpatterns = [
    path("receipts/next-number", NextReceiptNumberView.as_view()),
]
