import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


def _money():
    return models.DecimalField(
        decimal_places=2,
        default=Decimal("0.00"),
        max_digits=10,
        validators=[django.core.validators.MinValueValidator(0)],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("members", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Expense",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("description", models.CharField(max_length=255)),
                ("amount", _money()),
                ("category", models.CharField(blank=True, max_length=64, null=True)),
                ("expense_date", models.DateField()),
                ("notes", models.TextField(blank=True, null=True)),
                ("receipt", models.FileField(blank=True, max_length=255, null=True, upload_to="receipts/expenses/")),
            ],
            options={
                "ordering": ["-expense_date", "-id"],
                "indexes": [models.Index(fields=["expense_date"], name="idx_expense_date")],
            },
        ),
        migrations.CreateModel(
            name="ExtraordinaryFee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, null=True)),
                ("amount_per_member", _money()),
                ("due_date", models.DateField(blank=True, null=True)),
                ("is_mandatory", models.BooleanField(default=True)),
                ("category", models.CharField(blank=True, max_length=64, null=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="ExtraordinaryPayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("amount_paid", _money()),
                ("payment_date", models.DateField(blank=True, null=True)),
                (
                    "receipt",
                    models.FileField(blank=True, max_length=255, null=True, upload_to="receipts/extraordinary/"),
                ),
                ("receipt_number", models.CharField(blank=True, max_length=20, null=True)),
                (
                    "fee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="fees.extraordinaryfee",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="extraordinary_payments",
                        to="members.member",
                    ),
                ),
            ],
            options={
                "ordering": ["-payment_date", "-id"],
                "indexes": [models.Index(fields=["fee", "member"], name="idx_extra_fee_member")],
            },
        ),
        migrations.CreateModel(
            name="DegreeFee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("description", models.CharField(max_length=255)),
                ("amount", _money()),
                ("category", models.CharField(blank=True, max_length=64, null=True)),
                ("fee_date", models.DateField()),
                ("notes", models.TextField(blank=True, null=True)),
                ("receipt", models.FileField(blank=True, max_length=255, null=True, upload_to="receipts/degree/")),
                ("receipt_number", models.CharField(blank=True, max_length=20, null=True)),
                (
                    "member",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="degree_fees",
                        to="members.member",
                    ),
                ),
            ],
            options={
                "ordering": ["-fee_date", "-id"],
            },
        ),
    ]
