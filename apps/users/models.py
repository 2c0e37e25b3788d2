from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Operator account for the treasury back office."""

    email = models.EmailField(unique=True, null=True, blank=True)
    phone_number = models.CharField(max_length=20, null=True, blank=True)
    is_treasurer = models.BooleanField(
        default=False,
        help_text="Treasurers may record and edit payments without staff access.",
    )
    member = models.OneToOneField(
        "members.Member",
        on_delete=models.SET_NULL,
        related_name="user_account",
        null=True,
        blank=True,
    )

    def __str__(self):
        return f"{self.username} ({self.email})" if self.email else self.username
