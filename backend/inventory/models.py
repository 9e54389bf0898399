from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from sppg.ids import new_id


class ItemType(models.TextChoices):
    BAHAN = "BAHAN", "Bahan Baku"
    ALAT = "ALAT", "Alat Dapur"


class StockItem(models.Model):
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=64, blank=True)
    item_type = models.CharField(max_length=8, choices=ItemType.choices, default=ItemType.BAHAN, db_index=True)
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    unit = models.CharField(max_length=32, default="Unit")
    min_threshold = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    last_updated = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.quantity} {self.unit})"

    @property
    def is_critical(self) -> bool:
        return self.quantity <= self.min_threshold

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "item_type": self.item_type,
            "quantity": float(self.quantity),
            "unit": self.unit,
            "min_threshold": float(self.min_threshold),
            "last_updated": self.last_updated.isoformat(),
        }


class StockTransaction(models.Model):
    """Immutable audit record of one stock mutation."""

    class Kind(models.TextChoices):
        IN = "IN", "Masuk"
        OUT = "OUT", "Keluar"

    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    item = models.ForeignKey(StockItem, on_delete=models.SET_NULL, null=True, blank=True, related_name="transactions")
    item_name = models.CharField(max_length=255)
    kind = models.CharField(max_length=3, choices=Kind.choices)
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    date = models.DateTimeField(default=timezone.now, db_index=True)
    notes = models.TextField(blank=True)
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["-date"]

    def __str__(self):
        return f"{self.kind} {self.quantity} {self.item_name}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "item_id": self.item_id,
            "item_name": self.item_name,
            "type": self.kind,
            "quantity": float(self.quantity),
            "date": self.date.isoformat(),
            "notes": self.notes,
            "performed_by": self.performed_by.username if self.performed_by_id else None,
        }
