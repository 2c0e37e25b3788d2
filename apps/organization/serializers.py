from rest_framework import serializers

from .models import OrganizationSettings


class OrganizationSettingsSerializer(serializers.ModelSerializer):
    logo = serializers.ImageField(required=False, allow_null=True)
    treasurer_signature = serializers.ImageField(required=False, allow_null=True)
    master_signature = serializers.ImageField(required=False, allow_null=True)

    class Meta:
        model = OrganizationSettings
        fields = [
            "id",
            "institution_name",
            "monthly_fee_base",
            "logo",
            "treasurer",
            "treasurer_signature",
            "master_signature",
            "monthly_report_template",
            "annual_report_template",
            "updated_at",
        ]
        read_only_fields = ["id", "updated_at"]

    def validate_monthly_fee_base(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("Monthly fee must be greater than zero")
        return value
