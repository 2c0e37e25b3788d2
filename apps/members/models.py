from django.db import models

from apps.common.models import TimeStampedModel


class Member(TimeStampedModel):
    """A lodge member; the subject of every dues and fee record."""

    class Degree(models.TextChoices):
        APPRENTICE = "apprentice", "Apprentice"
        FELLOW = "fellow", "Fellow Craft"
        MASTER = "master", "Master"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"

    class Office(models.TextChoices):
        WORSHIPFUL_MASTER = "worshipful_master", "Worshipful Master"
        SENIOR_WARDEN = "senior_warden", "Senior Warden"
        JUNIOR_WARDEN = "junior_warden", "Junior Warden"
        TREASURER = "treasurer", "Treasurer"
        SECRETARY = "secretary", "Secretary"

    full_name = models.CharField(max_length=200)
    degree = models.CharField(
        max_length=20, choices=Degree.choices, default=Degree.APPRENTICE
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.ACTIVE, db_index=True
    )
    lodge_office = models.CharField(
        max_length=32, choices=Office.choices, blank=True, null=True
    )
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    national_id = models.CharField(max_length=32, blank=True, null=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    join_date = models.DateField(blank=True, null=True)
    birth_date = models.DateField(blank=True, null=True)
    emergency_contact_name = models.CharField(max_length=200, blank=True, null=True)
    emergency_contact_phone = models.CharField(max_length=32, blank=True, null=True)

    class Meta:
        ordering = ["full_name", "id"]
        indexes = [
            models.Index(fields=["status", "full_name"], name="idx_member_status_name"),
        ]

    def __str__(self) -> str:
        return self.full_name

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def first_name(self) -> str:
        return self.full_name.split(" ")[0] if self.full_name else ""
