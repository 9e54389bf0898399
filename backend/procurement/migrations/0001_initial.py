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
        ("menus", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Procurement",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=sppg.ids.new_id, editable=False, max_length=36, primary_key=True, serialize=False
                    ),
                ),
                ("date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("supplier", models.CharField(max_length=255)),
                ("items", models.JSONField(blank=True, default=list)),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Menunggu"), ("ORDERED", "Dipesan"), ("RECEIVED", "Diterima")],
                        db_index=True,
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                (
                    "funding_source",
                    models.CharField(
                        choices=[("OPERASIONAL", "Operasional"), ("YAYASAN", "Yayasan")],
                        default="YAYASAN",
                        max_length=12,
                    ),
                ),
                ("total_price", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("invoice_photo_url", models.TextField(blank=True)),
                ("photo_url", models.TextField(blank=True)),
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
                (
                    "source_menu",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="procurements",
                        to="menus.menuplan",
                    ),
                ),
            ],
            options={
                "ordering": ["-date"],
            },
        ),
    ]
