import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("members", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OrganizationSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("institution_name", models.CharField(max_length=200)),
                ("monthly_fee_base", models.DecimalField(decimal_places=2, max_digits=10)),
                ("logo", models.ImageField(blank=True, null=True, upload_to="logos/")),
                ("treasurer_signature", models.ImageField(blank=True, null=True, upload_to="signatures/")),
                ("master_signature", models.ImageField(blank=True, null=True, upload_to="signatures/")),
                ("monthly_report_template", models.TextField(blank=True)),
                ("annual_report_template", models.TextField(blank=True)),
                (
                    "treasurer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="members.member",
                    ),
                ),
            ],
            options={
                "verbose_name": "organization settings",
                "verbose_name_plural": "organization settings",
            },
        ),
    ]
