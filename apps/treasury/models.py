from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.common.models import TimeStampedModel
from apps.common.money import ZERO

from . import entries
from .entries import LedgerEntry, build_entry


class DuesEntry(TimeStampedModel):
    """Money applied to one member for one (month, year) dues slot."""

    class PaymentType(models.TextChoices):
        REGULAR = entries.REGULAR, "Regular"
        QUICK_PAY = entries.QUICK_PAY, "Quick pay"
        QUICK_PAY_BENEFIT = entries.QUICK_PAY_BENEFIT, "Quick pay benefit"
        ADVANCE_PAY = entries.ADVANCE_PAY, "Advance pay"

    member = models.ForeignKey(
        "members.Member", on_delete=models.CASCADE, related_name="dues_entries"
    )
    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    year = models.PositiveSmallIntegerField()
    amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=ZERO, validators=[MinValueValidator(0)]
    )
    paid_at = models.DateField(blank=True, null=True)
    payment_type = models.CharField(
        max_length=24, choices=PaymentType.choices, default=PaymentType.REGULAR
    )
    notes = models.TextField(blank=True, null=True)
    receipt = models.FileField(upload_to="receipts/monthly/", blank=True, null=True, max_length=255)
    group_id = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="dues_entries_recorded",
        null=True,
        blank=True,
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["member", "month", "year"],
                name="unique_member_month_year_dues",
            ),
        ]
        indexes = [
            models.Index(fields=["member", "year", "month"], name="idx_dues_member_ym"),
        ]
        ordering = ["member_id", "year", "month"]
        verbose_name_plural = "dues entries"

    def __str__(self):
        return f"DuesEntry(member={self.member_id}, date={self.year}-{self.month:02d}, amount={self.amount})"

    def clean(self):
        super().clean()
        if self.payment_type == self.PaymentType.QUICK_PAY_BENEFIT and self.amount:
            raise ValidationError({"amount": "Quick-pay benefit months must have a zero amount"})

    @property
    def is_benefit(self) -> bool:
        return self.payment_type == self.PaymentType.QUICK_PAY_BENEFIT

    def to_ledger_entry(self) -> LedgerEntry:
        return build_entry(
            self.payment_type,
            group_id=self.group_id or "",
            member_id=self.member_id,
            month=self.month,
            year=self.year,
            amount=self.amount,
            paid_at=self.paid_at,
            notes=self.notes or "",
            receipt=self.receipt.name if self.receipt else "",
            id=self.pk,
        )
