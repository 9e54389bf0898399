from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.models import Capability
from sppg.ids import new_id


class Division(models.TextChoices):
    PERSIAPAN = "PERSIAPAN", "Persiapan"
    PENGOLAHAN = "PENGOLAHAN", "Pengolahan"
    PACKING = "PACKING", "Packing"
    DISTRIBUSI = "DISTRIBUSI", "Distribusi"
    CUCI_OMPRENG = "CUCI_OMPRENG", "Cuci Ompreng"
    KEBERSIHAN = "KEBERSIHAN", "Kebersihan"
    PURCHASING = "PURCHASING", "Purchasing"
    KEAMANAN = "KEAMANAN", "Keamanan"


DIVISION_DEFAULT_CAPABILITIES = {
    Division.PERSIAPAN: [Capability.CAN_MANAGE_STOCK],
    Division.PENGOLAHAN: [Capability.CAN_MANAGE_STOCK],
    Division.DISTRIBUSI: [Capability.CAN_DISTRIBUTE],
    Division.PURCHASING: [Capability.CAN_RECEIVE, Capability.CAN_ORDER],
}


def default_capabilities(division: str) -> list[str]:
    return [str(c) for c in DIVISION_DEFAULT_CAPABILITIES.get(division, [])]


class Volunteer(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", "Aktif"
        INACTIVE = "INACTIVE", "Nonaktif"

    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    name = models.CharField(max_length=255)
    division = models.CharField(max_length=16, choices=Division.choices, default=Division.PERSIAPAN, db_index=True)
    phone = models.CharField(max_length=32, blank=True)
    status = models.CharField(max_length=8, choices=Status.choices, default=Status.ACTIVE)
    joined_at = models.DateTimeField(default=timezone.now)
    is_coordinator = models.BooleanField(default=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="volunteer"
    )

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.get_division_display()})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "division": self.division,
            "phone": self.phone,
            "status": self.status,
            "joined_at": self.joined_at.isoformat(),
            "is_coordinator": self.is_coordinator,
            "user_id": self.user_id,
        }
