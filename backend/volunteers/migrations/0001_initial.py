# Generated manually for the kitchen rollout

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import sppg.ids


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Volunteer",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=sppg.ids.new_id, editable=False, max_length=36, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                (
                    "division",
                    models.CharField(
                        choices=[
                            ("PERSIAPAN", "Persiapan"),
                            ("PENGOLAHAN", "Pengolahan"),
                            ("PACKING", "Packing"),
                            ("DISTRIBUSI", "Distribusi"),
                            ("CUCI_OMPRENG", "Cuci Ompreng"),
                            ("KEBERSIHAN", "Kebersihan"),
                            ("PURCHASING", "Purchasing"),
                            ("KEAMANAN", "Keamanan"),
                        ],
                        db_index=True,
                        default="PERSIAPAN",
                        max_length=16,
                    ),
                ),
                ("phone", models.CharField(blank=True, max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[("ACTIVE", "Aktif"), ("INACTIVE", "Nonaktif")], default="ACTIVE", max_length=8
                    ),
                ),
                ("joined_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("is_coordinator", models.BooleanField(default=False)),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="volunteer",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
    ]
