from django.contrib import admin

from .models import ReceiptCounter


@admin.register(ReceiptCounter)
class ReceiptCounterAdmin(admin.ModelAdmin):
    list_display = ("module", "last_number", "updated_at")
