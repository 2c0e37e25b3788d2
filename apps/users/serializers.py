from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.common.permissions import user_is_treasury_admin

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    member_id = serializers.IntegerField(read_only=True, allow_null=True)
    is_treasury_admin = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "phone_number",
            "member_id",
            "is_treasurer",
            "is_treasury_admin",
        ]
        read_only_fields = fields

    def get_is_treasury_admin(self, obj) -> bool:
        return user_is_treasury_admin(obj)
