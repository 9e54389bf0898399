from django.conf import settings
from django.db import models
from django.utils import timezone

from sppg.ids import new_id


class Procurement(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Menunggu"
        ORDERED = "ORDERED", "Dipesan"
        RECEIVED = "RECEIVED", "Diterima"

    class Funding(models.TextChoices):
        OPERASIONAL = "OPERASIONAL", "Operasional"
        YAYASAN = "YAYASAN", "Yayasan"

    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    date = models.DateTimeField(default=timezone.now, db_index=True)
    supplier = models.CharField(max_length=255)
    items = models.JSONField(default=list, blank=True)  # [{name, quantity, price, unit}]
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True)
    funding_source = models.CharField(max_length=12, choices=Funding.choices, default=Funding.YAYASAN)
    total_price = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    source_menu = models.ForeignKey(
        "menus.MenuPlan", on_delete=models.SET_NULL, null=True, blank=True, related_name="procurements"
    )
    invoice_photo_url = models.TextField(blank=True)
    photo_url = models.TextField(blank=True)
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["-date"]

    def __str__(self):
        return f"{self.supplier} - {self.total_price} ({self.status})"

    @property
    def first_item(self) -> dict:
        return self.items[0] if self.items else {}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "supplier": self.supplier,
            "items": list(self.items or []),
            "status": self.status,
            "funding_source": self.funding_source,
            "total_price": float(self.total_price),
            "source_menu_id": self.source_menu_id,
            "photo_url": self.photo_url or None,
            "invoice_photo_url": self.invoice_photo_url or None,
            "performed_by": self.performed_by.username if self.performed_by_id else None,
        }
