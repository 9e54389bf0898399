from django.conf import settings
from django.db import models
from django.utils import timezone

from sppg.ids import new_id


class Distribution(models.Model):
    """
    One delivery of prepared meals to one destination on one day.

    Lifecycle (forward only):
      PREPARING -> ON_DELIVERY -> DELIVERED -> PICKING_UP -> PICKED_UP
    Each step stamps its own timestamp once; see distribution.services.
    """

    class Status(models.TextChoices):
        PREPARING = "PREPARING", "Persiapan"
        ON_DELIVERY = "ON_DELIVERY", "Dalam Pengiriman"
        DELIVERED = "DELIVERED", "Terkirim"
        PICKING_UP = "PICKING_UP", "Penjemputan"
        PICKED_UP = "PICKED_UP", "Selesai"

    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    serial_number = models.CharField(max_length=64, unique=True, null=True, blank=True)
    destination = models.CharField(max_length=255, db_index=True)
    recipient_name = models.CharField(max_length=255)
    portions = models.PositiveIntegerField(default=0)
    driver_name = models.CharField(max_length=255, blank=True)
    pickup_driver_name = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PREPARING, db_index=True)

    timestamp = models.DateTimeField(default=timezone.now, db_index=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    pickup_started_at = models.DateTimeField(null=True, blank=True)
    picked_up_at = models.DateTimeField(null=True, blank=True)

    photo_url = models.TextField(blank=True)
    picked_up_count = models.PositiveIntegerField(null=True, blank=True)
    location = models.JSONField(null=True, blank=True)  # {lat, lng, address?}
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["-timestamp", "serial_number"]
        indexes = [models.Index(fields=["destination", "timestamp"], name="distrib_dest_ts_idx")]

    def __str__(self):
        return f"{self.serial_number or self.id} {self.destination} ({self.status})"

    @property
    def activity_time(self):
        return self.delivered_at or self.sent_at or self.timestamp

    def to_dict(self) -> dict:
        def iso(dt):
            return dt.isoformat() if dt else None

        return {
            "id": self.id,
            "serial_number": self.serial_number,
            "destination": self.destination,
            "recipient_name": self.recipient_name,
            "driver_name": self.driver_name or None,
            "pickup_driver_name": self.pickup_driver_name or None,
            "portions": self.portions,
            "status": self.status,
            "timestamp": iso(self.timestamp),
            "sent_at": iso(self.sent_at),
            "delivered_at": iso(self.delivered_at),
            "pickup_started_at": iso(self.pickup_started_at),
            "picked_up_at": iso(self.picked_up_at),
            "photo_url": self.photo_url or None,
            "picked_up_count": self.picked_up_count,
            "location": self.location,
            "performed_by": self.performed_by.username if self.performed_by_id else None,
        }


class SerialCounter(models.Model):
    """Highest serial number ever issued per suffix (agency code, month, year)."""
    suffix = models.CharField(max_length=64, unique=True)
    last_number = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.last_number:03d}{self.suffix}"
