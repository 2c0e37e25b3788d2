from django.db import models

from apps.common.models import TimeStampedModel


class ReceiptCounter(TimeStampedModel):
    """Monotonic receipt sequence, one row per module."""

    class Module(models.TextChoices):
        TREASURY = "treasury", "Treasury"
        EXTRAORDINARY = "extraordinary", "Extraordinary fees"
        DEGREE = "degree", "Degree fees"

    module = models.CharField(max_length=20, choices=Module.choices, unique=True)
    last_number = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["module"]

    def __str__(self) -> str:
        return f"{self.module}: {self.last_number}"
