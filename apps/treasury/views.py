import csv
import logging
from typing import Tuple

from django.db.models import Count, Sum
from django.http import HttpResponse
from django.utils import timezone
from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.filters import OrderingFilter
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.money import ZERO, to_money
from apps.common.permissions import IsAdminOrReadOnly, IsAdminRole
from apps.common.uploads import save_receipt_upload
from apps.members.models import Member
from apps.organization.services import get_fee_settings
from apps.receipts.models import ReceiptCounter
from apps.receipts.services import next_receipt_number

from . import services
from .filters import DuesEntryFilter
from .fiscal import FiscalYearWindow, month_label
from .models import DuesEntry
from .serializers import (
    AdvancePayRequestSerializer,
    AllocationPlanSerializer,
    DuesEntryEditSerializer,
    DuesEntrySerializer,
    GridRowSerializer,
    PaymentOutcomeSerializer,
    PaymentPreviewSerializer,
    PaymentRequestSerializer,
    QuickPayRequestSerializer,
)
from .store import DuesStore

logger = logging.getLogger(__name__)

RECEIPT_FOLDER = "monthly"


def _parse_year_month(params) -> Tuple[int, int]:
    now = timezone.localtime()
    year_raw = params.get("year", now.year)
    month_raw = params.get("month", now.month)

    try:
        year = int(year_raw)
    except (TypeError, ValueError):
        raise ValueError("Year must be an integer")
    try:
        month = int(month_raw)
    except (TypeError, ValueError):
        raise ValueError("Month must be an integer between 1 and 12")

    if year <= 0:
        raise ValueError("Year must be positive")
    if month < 1 or month > 12:
        raise ValueError("Month must be between 1 and 12")

    return year, month


def _parse_window(params) -> FiscalYearWindow:
    fiscal_year = params.get("fiscal_year")
    if fiscal_year:
        try:
            start = int(fiscal_year)
        except (TypeError, ValueError):
            raise ValueError("fiscal_year must be an integer")
        if start <= 0:
            raise ValueError("fiscal_year must be positive")
        return FiscalYearWindow.starting(start)

    raw_date = params.get("date")
    if raw_date:
        try:
            parsed = parse_date(raw_date)
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValueError("date must be a valid YYYY-MM-DD date")
        return FiscalYearWindow.for_date(parsed)
    return FiscalYearWindow.for_date(timezone.localdate())


def _cell_state(entry, monthly_fee) -> str:
    if entry is None:
        return "empty"
    if not entry.counts_toward_paid:
        return "benefit"
    if entry.is_settled(monthly_fee):
        return "paid"
    return "partial"


def _outcome_status(report, created: bool = True) -> int:
    if report.abandoned:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if report.status == "failed":
        return status.HTTP_409_CONFLICT
    if report.status == "partial" or not created:
        return status.HTTP_200_OK
    return status.HTTP_201_CREATED


def _respond(outcome, issue_receipt_number: bool = False, created: bool = True) -> Response:
    if issue_receipt_number and outcome.report.applied:
        outcome.receipt.receipt_number = next_receipt_number(ReceiptCounter.Module.TREASURY)
    return Response(
        PaymentOutcomeSerializer(outcome).data,
        status=_outcome_status(outcome.report, created=created),
    )


class DuesGridView(APIView):
    """One row per active member with the twelve months of a lodge year."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            window = _parse_window(request.query_params)
        except ValueError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        monthly_fee = get_fee_settings().monthly_fee_base
        members = Member.objects.filter(status=Member.Status.ACTIVE)
        search = request.query_params.get("search")
        if search:
            members = members.filter(full_name__icontains=search)
        members = list(members.order_by("full_name", "id"))

        store = DuesStore()
        member_ids = [member.pk for member in members]
        ledgers = store.snapshots(member_ids, window)
        accumulated = store.accumulated_paid_by_member(member_ids)

        rows = []
        for member in members:
            ledger = ledgers[member.pk]
            cells = []
            for index, month, year in window.slots():
                entry = ledger.entry_at(index)
                cells.append(
                    {
                        "fiscal_index": index,
                        "month": month,
                        "year": year,
                        "state": _cell_state(entry, monthly_fee),
                        "pending": ledger.deficit_at(index, monthly_fee),
                        "entry": entry,
                    }
                )
            rows.append(
                {
                    "member": member,
                    "outstanding": ledger.outstanding_balance(monthly_fee),
                    "accumulated": accumulated[member.pk],
                    "cells": cells,
                }
            )

        return Response(
            {
                "fiscal_year": window.label,
                "current_year": window.current_year,
                "next_year": window.next_year,
                "monthly_fee": str(monthly_fee),
                "months": [
                    {"fiscal_index": index, "month": month, "year": year, "label": month_label(month, year)}
                    for index, month, year in window.slots()
                ],
                "rows": GridRowSerializer(rows, many=True).data,
            }
        )


class PaymentPreviewView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def post(self, request):
        serializer = PaymentPreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        plan = services.preview_payment(
            data["member"].pk, data["month"], data["year"], data["amount"], get_fee_settings()
        )
        if plan is None:
            return Response({"mode": "edit", "plan": None})
        return Response({"mode": "allocation", "plan": AllocationPlanSerializer(plan).data})


class PaymentCreateView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        serializer = PaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        outcome = services.register_payment(
            data["member"],
            data["month"],
            data["year"],
            data["amount"],
            get_fee_settings(),
            paid_at=data.get("paid_at"),
            notes=data.get("notes") or "",
            receipt=save_receipt_upload(data.get("receipt"), RECEIPT_FOLDER),
            second_receipt=save_receipt_upload(data.get("second_receipt"), RECEIPT_FOLDER),
            store=DuesStore(recorded_by=request.user),
        )
        return _respond(
            outcome,
            data.get("issue_receipt_number", False),
            created=outcome.kind != services.PaymentOutcome.EDIT,
        )


class QuickPayView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        serializer = QuickPayRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        per_month = data.get("amount_per_month")
        if per_month is None:
            per_month = get_fee_settings().monthly_fee_base
        fiscal_year = data.get("fiscal_year")
        outcome = services.quick_pay(
            data["member"],
            per_month,
            data.get("paid_at"),
            receipt=save_receipt_upload(data.get("receipt"), RECEIPT_FOLDER),
            window=FiscalYearWindow.starting(fiscal_year) if fiscal_year else None,
            store=DuesStore(recorded_by=request.user),
        )
        return _respond(outcome, data.get("issue_receipt_number", False))


class AdvancePayView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request):
        serializer = AdvancePayRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        outcome = services.advance_pay(
            data["member"],
            [(item["month"], item["year"]) for item in data["months"]],
            get_fee_settings(),
            data.get("paid_at"),
            receipt=save_receipt_upload(data.get("receipt"), RECEIPT_FOLDER),
            store=DuesStore(recorded_by=request.user),
        )
        return _respond(outcome, data.get("issue_receipt_number", False))


class DuesEntryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Browse recorded months. PATCH corrects one entry without redistributing."""

    queryset = DuesEntry.objects.select_related("member").all()
    serializer_class = DuesEntrySerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = DuesEntryFilter
    ordering_fields = ["year", "month", "paid_at", "amount", "id"]
    ordering = ["member_id", "year", "month"]
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def partial_update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = DuesEntryEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        outcome = services.edit_dues_entry(
            instance.member,
            instance.pk,
            get_fee_settings(),
            data["amount"],
            paid_at=data.get("paid_at"),
            notes=data.get("notes"),
            receipt=save_receipt_upload(data.get("receipt"), RECEIPT_FOLDER) or None,
            store=DuesStore(recorded_by=request.user),
        )
        return _respond(outcome, data.get("issue_receipt_number", False), created=False)

    def perform_destroy(self, instance):
        logger.info(
            "Deleting dues entry %s (member=%s, %s/%s, type=%s)",
            instance.pk,
            instance.member_id,
            instance.month,
            instance.year,
            instance.payment_type,
        )
        super().perform_destroy(instance)


class DuesTotalsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            year, month = _parse_year_month(request.query_params)
        except ValueError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        entries = DuesEntry.objects.filter(year=year, month=month)
        paid = entries.exclude(payment_type=DuesEntry.PaymentType.QUICK_PAY_BENEFIT).aggregate(
            total=Sum("amount"), count=Count("id")
        )
        benefit_count = entries.filter(payment_type=DuesEntry.PaymentType.QUICK_PAY_BENEFIT).count()
        monthly_fee = get_fee_settings().monthly_fee_base
        active_count = Member.objects.filter(status=Member.Status.ACTIVE).count()

        return Response(
            {
                "year": year,
                "month": month,
                "label": month_label(month, year),
                "paid_sum": str(to_money(paid["total"] or ZERO)),
                "paid_count": paid["count"],
                "benefit_count": benefit_count,
                "expected_sum": str(to_money(monthly_fee * active_count)),
            }
        )


class DuesExportView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        try:
            year, month = _parse_year_month(request.query_params)
        except ValueError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        entries = DuesEntry.objects.select_related("member").filter(year=year, month=month)
        filename = f"dues_{year}_{month:02d}.csv"

        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = f"attachment; filename={filename}"

        writer = csv.writer(response)
        writer.writerow(["member", "payment_type", "amount", "paid_at", "group_id"])

        for entry in entries:
            writer.writerow(
                [
                    entry.member.full_name,
                    entry.payment_type,
                    entry.amount,
                    entry.paid_at.isoformat() if entry.paid_at else "",
                    entry.group_id or "",
                ]
            )

        return response


__all__ = [
    "DuesGridView",
    "PaymentPreviewView",
    "PaymentCreateView",
    "QuickPayView",
    "AdvancePayView",
    "DuesEntryViewSet",
    "DuesTotalsView",
    "DuesExportView",
]
