from django.contrib import admin

from .models import DegreeFee, Expense, ExtraordinaryFee, ExtraordinaryPayment


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ("id", "description", "amount", "category", "expense_date")
    list_filter = ("category",)
    search_fields = ("description", "notes")
    ordering = ("-expense_date",)


class ExtraordinaryPaymentInline(admin.TabularInline):
    model = ExtraordinaryPayment
    extra = 0
    raw_id_fields = ("member",)


@admin.register(ExtraordinaryFee)
class ExtraordinaryFeeAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "amount_per_member", "due_date", "is_mandatory")
    list_filter = ("is_mandatory", "category")
    search_fields = ("name",)
    inlines = [ExtraordinaryPaymentInline]


@admin.register(DegreeFee)
class DegreeFeeAdmin(admin.ModelAdmin):
    list_display = ("id", "member", "description", "amount", "fee_date", "receipt_number")
    search_fields = ("description", "member__full_name", "receipt_number")
    ordering = ("-fee_date",)
    raw_id_fields = ("member",)
