from decimal import Decimal

from rest_framework import serializers

from apps.common.uploads import validate_receipt_file
from apps.members.models import Member
from apps.members.serializers import MemberSummarySerializer
from apps.receipts.serializers import ReceiptDataSerializer

from .models import DuesEntry

MONEY = dict(max_digits=10, decimal_places=2)


class DuesEntrySerializer(serializers.ModelSerializer):
    member_id = serializers.IntegerField(read_only=True)
    receipt = serializers.FileField(read_only=True)

    class Meta:
        model = DuesEntry
        fields = [
            "id",
            "member_id",
            "month",
            "year",
            "amount",
            "paid_at",
            "payment_type",
            "notes",
            "receipt",
            "group_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class DuesEntryEditSerializer(serializers.Serializer):
    amount = serializers.DecimalField(min_value=Decimal("0"), **MONEY)
    paid_at = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    receipt = serializers.FileField(required=False, allow_null=True)
    issue_receipt_number = serializers.BooleanField(required=False, default=False)

    def validate_receipt(self, value):
        return validate_receipt_file(value)


class _MemberSlotSerializer(serializers.Serializer):
    member_id = serializers.PrimaryKeyRelatedField(
        source="member", queryset=Member.objects.filter(status=Member.Status.ACTIVE)
    )
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=1)


class PaymentPreviewSerializer(_MemberSlotSerializer):
    # non-positive amounts are rejected by the allocator itself
    amount = serializers.DecimalField(**MONEY)


class PaymentRequestSerializer(PaymentPreviewSerializer):
    paid_at = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    receipt = serializers.FileField(required=False, allow_null=True)
    second_receipt = serializers.FileField(required=False, allow_null=True)
    issue_receipt_number = serializers.BooleanField(required=False, default=False)

    def validate_receipt(self, value):
        return validate_receipt_file(value)

    def validate_second_receipt(self, value):
        return validate_receipt_file(value)


class QuickPayRequestSerializer(serializers.Serializer):
    member_id = serializers.PrimaryKeyRelatedField(
        source="member", queryset=Member.objects.filter(status=Member.Status.ACTIVE)
    )
    amount_per_month = serializers.DecimalField(required=False, allow_null=True, **MONEY)
    paid_at = serializers.DateField(required=False, allow_null=True)
    fiscal_year = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    receipt = serializers.FileField(required=False, allow_null=True)
    issue_receipt_number = serializers.BooleanField(required=False, default=False)

    def validate_receipt(self, value):
        return validate_receipt_file(value)


class MonthYearSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=1)


class AdvancePayRequestSerializer(serializers.Serializer):
    member_id = serializers.PrimaryKeyRelatedField(
        source="member", queryset=Member.objects.filter(status=Member.Status.ACTIVE)
    )
    months = MonthYearSerializer(many=True, allow_empty=True)
    paid_at = serializers.DateField(required=False, allow_null=True)
    receipt = serializers.FileField(required=False, allow_null=True)
    issue_receipt_number = serializers.BooleanField(required=False, default=False)

    def validate_receipt(self, value):
        return validate_receipt_file(value)


class SlotAllocationSerializer(serializers.Serializer):
    fiscal_index = serializers.IntegerField()
    month = serializers.IntegerField()
    year = serializers.IntegerField()
    label = serializers.CharField()
    applied = serializers.DecimalField(**MONEY)
    resulting_amount = serializers.DecimalField(**MONEY)
    is_creation = serializers.BooleanField()
    is_partial = serializers.SerializerMethodField()

    def get_is_partial(self, obj) -> bool:
        return obj.is_partial(self.context["monthly_fee"])


class AllocationPlanSerializer(serializers.Serializer):
    member_id = serializers.IntegerField()
    target_month = serializers.IntegerField()
    target_year = serializers.IntegerField()
    lump_sum = serializers.DecimalField(**MONEY)
    monthly_fee = serializers.DecimalField(**MONEY)
    total_applied = serializers.DecimalField(**MONEY)
    unallocated = serializers.DecimalField(**MONEY)
    slot_count = serializers.IntegerField()
    needs_second_receipt = serializers.BooleanField()
    allocations = serializers.SerializerMethodField()

    def get_allocations(self, obj):
        return SlotAllocationSerializer(
            obj.allocations, many=True, context={"monthly_fee": obj.monthly_fee}
        ).data


class SlotResultSerializer(serializers.Serializer):
    month = serializers.IntegerField()
    year = serializers.IntegerField()
    amount = serializers.DecimalField(**MONEY)
    status = serializers.CharField()
    error = serializers.CharField(allow_blank=True)
    entry_id = serializers.SerializerMethodField()

    def get_entry_id(self, obj):
        return obj.entry.id if obj.entry is not None else None


class ApplyReportSerializer(serializers.Serializer):
    status = serializers.CharField()
    summary = serializers.CharField()
    abandoned = serializers.BooleanField()
    results = SlotResultSerializer(many=True)


class PaymentOutcomeSerializer(serializers.Serializer):
    kind = serializers.CharField()
    report = ApplyReportSerializer()
    receipt = ReceiptDataSerializer()
    plan = serializers.SerializerMethodField()
    group_id = serializers.SerializerMethodField()
    total_charged = serializers.SerializerMethodField()

    def get_plan(self, obj):
        if obj.plan is None:
            return None
        return AllocationPlanSerializer(obj.plan).data

    def get_group_id(self, obj):
        return obj.bulk.group_id if obj.bulk is not None else None

    def get_total_charged(self, obj):
        if obj.bulk is None:
            return None
        return serializers.DecimalField(**MONEY).to_representation(obj.bulk.total_charged)


class LedgerEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField(allow_null=True)
    amount = serializers.DecimalField(**MONEY)
    paid_at = serializers.DateField(allow_null=True)
    payment_type = serializers.CharField()
    notes = serializers.CharField(allow_blank=True)
    receipt = serializers.CharField(allow_blank=True)
    group_id = serializers.CharField(allow_blank=True)


class GridCellSerializer(serializers.Serializer):
    fiscal_index = serializers.IntegerField()
    month = serializers.IntegerField()
    year = serializers.IntegerField()
    state = serializers.CharField()
    pending = serializers.DecimalField(**MONEY)
    entry = LedgerEntrySerializer(allow_null=True)


class GridRowSerializer(serializers.Serializer):
    member = MemberSummarySerializer()
    outstanding = serializers.DecimalField(max_digits=12, decimal_places=2)
    accumulated = serializers.DecimalField(max_digits=12, decimal_places=2)
    cells = GridCellSerializer(many=True)
