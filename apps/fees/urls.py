from rest_framework.routers import DefaultRouter

from apps.fees.views import (
    DegreeFeeViewSet,
    ExpenseViewSet,
    ExtraordinaryFeeViewSet,
    ExtraordinaryPaymentViewSet,
)

router = DefaultRouter()
router.register(r"fees/expenses", ExpenseViewSet, basename="expense")
router.register(r"fees/extraordinary", ExtraordinaryFeeViewSet, basename="extraordinary-fee")
router.register(
    r"fees/extraordinary-payments", ExtraordinaryPaymentViewSet, basename="extraordinary-payment"
)
router.register(r"fees/degree", DegreeFeeViewSet, basename="degree-fee")

urlpatterns = router.urls
