# Generated manually for the kitchen rollout

from decimal import Decimal
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
            name="StockItem",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=sppg.ids.new_id, editable=False, max_length=36, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(blank=True, max_length=64)),
                (
                    "item_type",
                    models.CharField(
                        choices=[("BAHAN", "Bahan Baku"), ("ALAT", "Alat Dapur")],
                        db_index=True,
                        default="BAHAN",
                        max_length=8,
                    ),
                ),
                ("quantity", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("unit", models.CharField(default="Unit", max_length=32)),
                ("min_threshold", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("last_updated", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="StockTransaction",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=sppg.ids.new_id, editable=False, max_length=36, primary_key=True, serialize=False
                    ),
                ),
                ("item_name", models.CharField(max_length=255)),
                ("kind", models.CharField(choices=[("IN", "Masuk"), ("OUT", "Keluar")], max_length=3)),
                ("quantity", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("notes", models.TextField(blank=True)),
                (
                    "item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transactions",
                        to="inventory.stockitem",
                    ),
                ),
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
                "ordering": ["-date"],
            },
        ),
    ]
