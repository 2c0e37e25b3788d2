import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("members", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DuesEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                ("year", models.PositiveSmallIntegerField()),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("paid_at", models.DateField(blank=True, null=True)),
                (
                    "payment_type",
                    models.CharField(
                        choices=[
                            ("regular", "Regular"),
                            ("quick_pay", "Quick pay"),
                            ("quick_pay_benefit", "Quick pay benefit"),
                            ("advance_pay", "Advance pay"),
                        ],
                        default="regular",
                        max_length=24,
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                ("receipt", models.FileField(blank=True, max_length=255, null=True, upload_to="receipts/monthly/")),
                ("group_id", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="dues_entries",
                        to="members.member",
                    ),
                ),
                (
                    "recorded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="dues_entries_recorded",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "dues entries",
                "ordering": ["member_id", "year", "month"],
                "indexes": [models.Index(fields=["member", "year", "month"], name="idx_dues_member_ym")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("member", "month", "year"), name="unique_member_month_year_dues"
                    )
                ],
            },
        ),
    ]
