from django.contrib import admin

from .models import DuesEntry


@admin.register(DuesEntry)
class DuesEntryAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "member",
        "year",
        "month",
        "amount",
        "payment_type",
        "paid_at",
        "group_id",
        "created_at",
    )
    list_filter = ("year", "month", "payment_type")
    search_fields = ("member__full_name", "group_id")
    ordering = ("-year", "-month", "member__full_name")
    raw_id_fields = ("member", "recorded_by")
