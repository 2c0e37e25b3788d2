from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import TimeStampedModel
from apps.common.money import ZERO


class Expense(TimeStampedModel):
    description = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)]
    )
    category = models.CharField(max_length=64, blank=True, null=True)
    expense_date = models.DateField()
    notes = models.TextField(blank=True, null=True)
    receipt = models.FileField(upload_to="receipts/expenses/", blank=True, null=True, max_length=255)

    class Meta:
        ordering = ["-expense_date", "-id"]
        indexes = [models.Index(fields=["expense_date"], name="idx_expense_date")]

    def __str__(self):
        return f"{self.description} ({self.amount})"


class ExtraordinaryFee(TimeStampedModel):
    """A one-off levy charged to every member (e.g. a building fund)."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    amount_per_member = models.DecimalField(
        max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)]
    )
    due_date = models.DateField(blank=True, null=True)
    is_mandatory = models.BooleanField(default=True)
    category = models.CharField(max_length=64, blank=True, null=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.name


class ExtraordinaryPayment(TimeStampedModel):
    fee = models.ForeignKey(ExtraordinaryFee, on_delete=models.CASCADE, related_name="payments")
    member = models.ForeignKey(
        "members.Member", on_delete=models.CASCADE, related_name="extraordinary_payments"
    )
    amount_paid = models.DecimalField(
        max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)]
    )
    payment_date = models.DateField(blank=True, null=True)
    receipt = models.FileField(
        upload_to="receipts/extraordinary/", blank=True, null=True, max_length=255
    )
    receipt_number = models.CharField(max_length=20, blank=True, null=True)

    class Meta:
        ordering = ["-payment_date", "-id"]
        indexes = [models.Index(fields=["fee", "member"], name="idx_extra_fee_member")]

    def __str__(self):
        return f"ExtraordinaryPayment(fee={self.fee_id}, member={self.member_id}, amount={self.amount_paid})"


class DegreeFee(TimeStampedModel):
    member = models.ForeignKey(
        "members.Member",
        on_delete=models.SET_NULL,
        related_name="degree_fees",
        null=True,
        blank=True,
    )
    description = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)]
    )
    category = models.CharField(max_length=64, blank=True, null=True)
    fee_date = models.DateField()
    notes = models.TextField(blank=True, null=True)
    receipt = models.FileField(upload_to="receipts/degree/", blank=True, null=True, max_length=255)
    receipt_number = models.CharField(max_length=20, blank=True, null=True)

    class Meta:
        ordering = ["-fee_date", "-id"]

    def __str__(self):
        return f"{self.description} ({self.amount})"
