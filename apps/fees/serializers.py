from decimal import Decimal

from rest_framework import serializers

from apps.common.money import ZERO
from apps.common.uploads import validate_receipt_file
from apps.members.models import Member
from apps.receipts.models import ReceiptCounter
from apps.receipts.services import next_receipt_number

from .models import DegreeFee, Expense, ExtraordinaryFee, ExtraordinaryPayment


class ReceiptNumberMixin:
    """Reserve a receipt number on save when ``issue_receipt_number`` is set."""

    receipt_module = None

    def _pop_flag(self, validated_data) -> bool:
        return bool(validated_data.pop("issue_receipt_number", False))

    def create(self, validated_data):
        if self._pop_flag(validated_data):
            validated_data["receipt_number"] = next_receipt_number(self.receipt_module)
        return super().create(validated_data)

    def update(self, instance, validated_data):
        if self._pop_flag(validated_data) and not instance.receipt_number:
            validated_data["receipt_number"] = next_receipt_number(self.receipt_module)
        return super().update(instance, validated_data)


def _validate_positive(value):
    if value is None or value <= 0:
        raise serializers.ValidationError("Amount must be greater than zero")
    return value


class ExpenseSerializer(serializers.ModelSerializer):
    receipt = serializers.FileField(required=False, allow_null=True)

    class Meta:
        model = Expense
        fields = [
            "id",
            "description",
            "amount",
            "category",
            "expense_date",
            "notes",
            "receipt",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_amount(self, value):
        return _validate_positive(value)

    def validate_receipt(self, value):
        return validate_receipt_file(value)


class ExtraordinaryFeeSerializer(serializers.ModelSerializer):
    collected = serializers.SerializerMethodField()
    expected = serializers.SerializerMethodField()
    pending = serializers.SerializerMethodField()

    class Meta:
        model = ExtraordinaryFee
        fields = [
            "id",
            "name",
            "description",
            "amount_per_member",
            "due_date",
            "is_mandatory",
            "category",
            "collected",
            "expected",
            "pending",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "collected", "expected", "pending", "created_at", "updated_at"]

    def validate_amount_per_member(self, value):
        return _validate_positive(value)

    def _collected(self, obj) -> Decimal:
        collected = getattr(obj, "collected", None)
        if collected is None:
            collected = sum((p.amount_paid for p in obj.payments.all()), ZERO)
        return collected

    def _expected(self, obj) -> Decimal:
        if not obj.is_mandatory:
            return ZERO
        count = self.context.get("active_member_count")
        if count is None:
            count = Member.objects.filter(status=Member.Status.ACTIVE).count()
        return obj.amount_per_member * count

    def get_collected(self, obj) -> str:
        return str(self._collected(obj))

    def get_expected(self, obj) -> str:
        return str(self._expected(obj))

    def get_pending(self, obj) -> str:
        return str(max(self._expected(obj) - self._collected(obj), ZERO))


class ExtraordinaryPaymentSerializer(ReceiptNumberMixin, serializers.ModelSerializer):
    receipt_module = ReceiptCounter.Module.EXTRAORDINARY

    fee_id = serializers.PrimaryKeyRelatedField(source="fee", queryset=ExtraordinaryFee.objects.all())
    member_id = serializers.PrimaryKeyRelatedField(source="member", queryset=Member.objects.all())
    member_name = serializers.CharField(source="member.full_name", read_only=True)
    receipt = serializers.FileField(required=False, allow_null=True)
    issue_receipt_number = serializers.BooleanField(write_only=True, required=False, default=False)

    class Meta:
        model = ExtraordinaryPayment
        fields = [
            "id",
            "fee_id",
            "member_id",
            "member_name",
            "amount_paid",
            "payment_date",
            "receipt",
            "receipt_number",
            "issue_receipt_number",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "member_name", "receipt_number", "created_at", "updated_at"]

    def validate_amount_paid(self, value):
        return _validate_positive(value)

    def validate_receipt(self, value):
        return validate_receipt_file(value)


class DegreeFeeSerializer(ReceiptNumberMixin, serializers.ModelSerializer):
    receipt_module = ReceiptCounter.Module.DEGREE

    member_id = serializers.PrimaryKeyRelatedField(
        source="member", queryset=Member.objects.all(), required=False, allow_null=True
    )
    member_name = serializers.CharField(source="member.full_name", read_only=True, default=None)
    receipt = serializers.FileField(required=False, allow_null=True)
    issue_receipt_number = serializers.BooleanField(write_only=True, required=False, default=False)

    class Meta:
        model = DegreeFee
        fields = [
            "id",
            "member_id",
            "member_name",
            "description",
            "amount",
            "category",
            "fee_date",
            "notes",
            "receipt",
            "receipt_number",
            "issue_receipt_number",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "member_name", "receipt_number", "created_at", "updated_at"]

    def validate_amount(self, value):
        return _validate_positive(value)

    def validate_receipt(self, value):
        return validate_receipt_file(value)
