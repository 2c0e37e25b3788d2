from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Member",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("full_name", models.CharField(max_length=200)),
                (
                    "degree",
                    models.CharField(
                        choices=[("apprentice", "Apprentice"), ("fellow", "Fellow Craft"), ("master", "Master")],
                        default="apprentice",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        db_index=True,
                        default="active",
                        max_length=20,
                    ),
                ),
                (
                    "lodge_office",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("worshipful_master", "Worshipful Master"),
                            ("senior_warden", "Senior Warden"),
                            ("junior_warden", "Junior Warden"),
                            ("treasurer", "Treasurer"),
                            ("secretary", "Secretary"),
                        ],
                        max_length=32,
                        null=True,
                    ),
                ),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("national_id", models.CharField(blank=True, max_length=32, null=True)),
                ("address", models.CharField(blank=True, max_length=255, null=True)),
                ("join_date", models.DateField(blank=True, null=True)),
                ("birth_date", models.DateField(blank=True, null=True)),
                ("emergency_contact_name", models.CharField(blank=True, max_length=200, null=True)),
                ("emergency_contact_phone", models.CharField(blank=True, max_length=32, null=True)),
            ],
            options={
                "ordering": ["full_name", "id"],
                "indexes": [models.Index(fields=["status", "full_name"], name="idx_member_status_name")],
            },
        ),
    ]
