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
            name="MenuPlan",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=sppg.ids.new_id, editable=False, max_length=36, primary_key=True, serialize=False
                    ),
                ),
                ("date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("name", models.CharField(max_length=255)),
                ("portions", models.PositiveIntegerField(default=0)),
                ("ingredients", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
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
