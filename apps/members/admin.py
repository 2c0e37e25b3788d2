from django.contrib import admin

from .models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "degree", "status", "lodge_office", "phone", "join_date")
    list_filter = ("status", "degree", "lodge_office")
    search_fields = ("full_name", "email", "national_id", "phone")
    ordering = ("full_name",)
