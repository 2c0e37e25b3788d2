from django.conf import settings
from django.db import models

from apps.common.models import TimeStampedModel


class OrganizationSettings(TimeStampedModel):
    """Single row of organization-wide settings (fee, names, signatures)."""

    institution_name = models.CharField(max_length=200)
    monthly_fee_base = models.DecimalField(max_digits=10, decimal_places=2)
    logo = models.ImageField(upload_to="logos/", blank=True, null=True)
    treasurer = models.ForeignKey(
        "members.Member",
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
    )
    treasurer_signature = models.ImageField(upload_to="signatures/", blank=True, null=True)
    master_signature = models.ImageField(upload_to="signatures/", blank=True, null=True)
    monthly_report_template = models.TextField(blank=True)
    annual_report_template = models.TextField(blank=True)

    class Meta:
        verbose_name = "organization settings"
        verbose_name_plural = "organization settings"

    def __str__(self) -> str:
        return self.institution_name

    @classmethod
    def load(cls) -> "OrganizationSettings":
        instance = cls.objects.order_by("id").first()
        if instance is None:
            instance = cls.objects.create(
                institution_name=settings.TREASURY_DEFAULT_INSTITUTION_NAME,
                monthly_fee_base=settings.TREASURY_DEFAULT_MONTHLY_FEE,
            )
        return instance
