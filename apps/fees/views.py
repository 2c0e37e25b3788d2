import logging

from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated

from apps.common.money import ZERO
from apps.common.permissions import IsAdminOrReadOnly
from apps.members.models import Member

from .filters import DegreeFeeFilter, ExpenseFilter, ExtraordinaryPaymentFilter
from .models import DegreeFee, Expense, ExtraordinaryFee, ExtraordinaryPayment
from .serializers import (
    DegreeFeeSerializer,
    ExpenseSerializer,
    ExtraordinaryFeeSerializer,
    ExtraordinaryPaymentSerializer,
)

logger = logging.getLogger(__name__)


class ExpenseViewSet(viewsets.ModelViewSet):
    queryset = Expense.objects.all()
    serializer_class = ExpenseSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = ExpenseFilter
    search_fields = ["description", "category", "notes"]
    ordering_fields = ["expense_date", "amount", "id"]
    ordering = ["-expense_date", "-id"]
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]


class ExtraordinaryFeeViewSet(viewsets.ModelViewSet):
    serializer_class = ExtraordinaryFeeSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ["is_mandatory", "category"]
    search_fields = ["name", "description"]
    ordering_fields = ["name", "due_date", "created_at", "id"]
    ordering = ["-created_at", "-id"]
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def get_queryset(self):
        return ExtraordinaryFee.objects.annotate(
            collected=Coalesce(
                Sum("payments__amount_paid"),
                Value(ZERO),
                output_field=DecimalField(max_digits=12, decimal_places=2),
            )
        )

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["active_member_count"] = Member.objects.filter(
            status=Member.Status.ACTIVE
        ).count()
        return context


class ExtraordinaryPaymentViewSet(viewsets.ModelViewSet):
    queryset = ExtraordinaryPayment.objects.select_related("fee", "member").all()
    serializer_class = ExtraordinaryPaymentSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ExtraordinaryPaymentFilter
    ordering_fields = ["payment_date", "amount_paid", "id"]
    ordering = ["-payment_date", "-id"]
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def perform_create(self, serializer):
        instance = serializer.save()
        logger.info(
            "Extraordinary payment %s recorded (fee=%s, member=%s, receipt=%s)",
            instance.pk,
            instance.fee_id,
            instance.member_id,
            instance.receipt_number,
        )


class DegreeFeeViewSet(viewsets.ModelViewSet):
    queryset = DegreeFee.objects.select_related("member").all()
    serializer_class = DegreeFeeSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = DegreeFeeFilter
    search_fields = ["description", "member__full_name"]
    ordering_fields = ["fee_date", "amount", "id"]
    ordering = ["-fee_date", "-id"]
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
