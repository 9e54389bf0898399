from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils.crypto import get_random_string

from accounts.services import ensure_master_admin
from inventory.models import ItemType, StockItem

INITIAL_STOCK = [
    # name, category, type, quantity, unit, min threshold
    ("Beras Premium", "Karbohidrat", ItemType.BAHAN, 150, "kg", 50),
    ("Telur Ayam", "Protein Hewani", ItemType.BAHAN, 200, "butir", 50),
    ("Daging Ayam", "Protein Hewani", ItemType.BAHAN, 25, "kg", 10),
    ("Tempe Kedelai", "Protein Nabati", ItemType.BAHAN, 40, "papan", 10),
    ("Tahu Putih", "Protein Nabati", ItemType.BAHAN, 100, "potong", 20),
    ("Sayur Bayam", "Sayuran", ItemType.BAHAN, 30, "ikat", 5),
    ("Pisang Ambon", "Buah Atau Susu", ItemType.BAHAN, 50, "sisir", 10),
    ("Susu UHT 200ml", "Buah Atau Susu", ItemType.BAHAN, 120, "kotak", 30),
    ("Wajan Stainless", "Masak", ItemType.ALAT, 5, "unit", 2),
]


class Command(BaseCommand):
    help = "Create the master admin account and seed the initial stock list."

    def add_arguments(self, parser):
        parser.add_argument("--admin-username", default="aslap")
        parser.add_argument("--admin-password", default=None)
        parser.add_argument("--admin-name", default="Moh. Fuadi")
        parser.add_argument("--skip-stock", action="store_true")

    def handle(self, *args, **opts):
        password = opts["admin_password"] or get_random_string(16)

        admin, created = ensure_master_admin(
            username=opts["admin_username"], password=password, full_name=opts["admin_name"],
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created master admin {admin.username} / {password}"))
        else:
            self.stdout.write(self.style.WARNING(f"Master admin {admin.username} already exists"))

        if opts["skip_stock"]:
            return

        if StockItem.objects.exists():
            self.stdout.write(self.style.WARNING("Stock already present; seed skipped."))
            return

        for name, category, item_type, qty, unit, threshold in INITIAL_STOCK:
            StockItem.objects.create(
                name=name,
                category=category,
                item_type=item_type,
                quantity=Decimal(qty),
                unit=unit,
                min_threshold=Decimal(threshold),
            )
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(INITIAL_STOCK)} stock items."))
        self.stdout.write(self.style.SUCCESS("Kitchen bootstrap complete."))
