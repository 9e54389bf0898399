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
            name="Distribution",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=sppg.ids.new_id, editable=False, max_length=36, primary_key=True, serialize=False
                    ),
                ),
                ("serial_number", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ("destination", models.CharField(db_index=True, max_length=255)),
                ("recipient_name", models.CharField(max_length=255)),
                ("portions", models.PositiveIntegerField(default=0)),
                ("driver_name", models.CharField(blank=True, max_length=255)),
                ("pickup_driver_name", models.CharField(blank=True, max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PREPARING", "Persiapan"),
                            ("ON_DELIVERY", "Dalam Pengiriman"),
                            ("DELIVERED", "Terkirim"),
                            ("PICKING_UP", "Penjemputan"),
                            ("PICKED_UP", "Selesai"),
                        ],
                        db_index=True,
                        default="PREPARING",
                        max_length=12,
                    ),
                ),
                ("timestamp", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                ("delivered_at", models.DateTimeField(blank=True, null=True)),
                ("pickup_started_at", models.DateTimeField(blank=True, null=True)),
                ("picked_up_at", models.DateTimeField(blank=True, null=True)),
                ("photo_url", models.TextField(blank=True)),
                ("picked_up_count", models.PositiveIntegerField(blank=True, null=True)),
                ("location", models.JSONField(blank=True, null=True)),
                (
                    "performed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-timestamp", "serial_number"],
                "indexes": [models.Index(fields=["destination", "timestamp"], name="distrib_dest_ts_idx")],
            },
        ),
    ]
