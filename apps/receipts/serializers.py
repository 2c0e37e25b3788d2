from rest_framework import serializers

from .models import ReceiptCounter


class ReceiptNumberRequestSerializer(serializers.Serializer):
    module = serializers.ChoiceField(choices=ReceiptCounter.Module.choices)


class ReceiptDataSerializer(serializers.Serializer):
    receipt_number = serializers.CharField(allow_null=True, required=False)
    member_name = serializers.CharField()
    member_degree = serializers.CharField(allow_null=True, required=False)
    member_phone = serializers.CharField(allow_null=True, required=False)
    concept = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    amount_paid = serializers.DecimalField(max_digits=12, decimal_places=2)
    remaining = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_date = serializers.DateField()
    details = serializers.ListField(child=serializers.CharField())
