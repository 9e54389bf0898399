from django.db import models
from django.contrib.auth.models import AbstractUser

from sppg.ids import new_id
from .managers import UserManager

MASTER_ADMIN_ID = "master-admin"


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Admin Utama"
    AKUNTAN = "AKUNTAN", "Akuntan"
    KA_SPPG = "KA_SPPG", "KA SPPG"
    AHLI_GIZI = "AHLI_GIZI", "Ahli Gizi"
    ADMIN_GUDANG = "ADMIN_GUDANG", "Admin Gudang"
    MITRA = "MITRA", "Mitra"
    RELAWAN = "RELAWAN", "Relawan"


class Capability(models.TextChoices):
    CAN_RECEIVE = "CAN_RECEIVE", "Terima Barang"
    CAN_ORDER = "CAN_ORDER", "Buat Pesanan"
    CAN_DISTRIBUTE = "CAN_DISTRIBUTE", "Atur Distribusi"
    CAN_MANAGE_STOCK = "CAN_MANAGE_STOCK", "Ubah Stok"
    CAN_CREATE_MENU = "CAN_CREATE_MENU", "Buat Menu"


class User(AbstractUser):
    """
    Kitchen staff account. Access is a role plus a list of capabilities;
    the ADMIN role implicitly holds every capability.
    """
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    full_name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.MITRA, db_index=True)
    permissions = models.JSONField(default=list, blank=True)

    REQUIRED_FIELDS = []

    objects = UserManager()

    def __str__(self):
        return self.username

    @property
    def display_name(self) -> str:
        return self.full_name or self.username

    @property
    def is_master(self) -> bool:
        return self.id == MASTER_ADMIN_ID

    def has_capability(self, cap: str) -> bool:
        if self.role == Role.ADMIN:
            return True
        return cap in (self.permissions or [])

    def capabilities(self) -> list[str]:
        if self.role == Role.ADMIN:
            return list(Capability.values)
        return [c for c in Capability.values if c in (self.permissions or [])]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "full_name": self.full_name,
            "role": self.role,
            "permissions": list(self.permissions or []),
        }
