# Generated manually: serial numbers survive cancellation and history clearing

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("distribution", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SerialCounter",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("suffix", models.CharField(max_length=64, unique=True)),
                ("last_number", models.PositiveIntegerField(default=0)),
            ],
        ),
    ]
