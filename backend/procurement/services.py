"""Purchase orders: PENDING -> ORDERED -> RECEIVED.

Invoice and receipt photos are the evidence for the two later steps. Like the
delivery lifecycle, out-of-order calls return False and change nothing.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from inventory.services import find_by_name
from menus.models import MenuPlan
from .models import Procurement

log = logging.getLogger(__name__)


class ProcurementError(Exception): ...


def _decimal(raw, label: str) -> Decimal:
    try:
        value = Decimal(str(raw if raw not in (None, "") else 0))
    except InvalidOperation:
        raise ProcurementError(f"{label} tidak valid.")
    if not value.is_finite() or value < 0:
        raise ProcurementError(f"{label} tidak valid.")
    return value


def _num(d: Decimal):
    return int(d) if d == d.to_integral_value() else float(d)


@transaction.atomic
def create_procurement(*, supplier: str, item_name: str, quantity, price, operational: bool = False,
                       source_menu_id: str | None = None, actor=None, now: datetime | None = None) -> Procurement:
    now = now or timezone.now()
    supplier = (supplier or "").strip()
    item_name = (item_name or "").strip()
    if not supplier or not item_name:
        raise ProcurementError("Supplier dan nama barang wajib diisi.")
    qty = _decimal(quantity, "Jumlah")
    unit_price = _decimal(price, "Harga")

    source_menu = None
    if source_menu_id:
        source_menu = MenuPlan.objects.filter(pk=source_menu_id).first()
        if source_menu is None:
            raise ProcurementError("Menu sumber tidak ditemukan.")

    stock_item = find_by_name(item_name)
    unit = stock_item.unit if stock_item else "Unit"

    return Procurement.objects.create(
        date=now,
        supplier=supplier,
        items=[{"name": item_name, "quantity": _num(qty), "price": _num(unit_price), "unit": unit}],
        status=Procurement.Status.PENDING,
        funding_source=Procurement.Funding.OPERASIONAL if operational else Procurement.Funding.YAYASAN,
        total_price=qty * unit_price,
        source_menu=source_menu,
        performed_by=actor if getattr(actor, "is_authenticated", False) else None,
    )


def process_order(p: Procurement) -> bool:
    if p.status != Procurement.Status.PENDING:
        return False
    p.status = Procurement.Status.ORDERED
    p.save(update_fields=["status"])
    return True


def attach_invoice(p: Procurement, photo_url: str) -> bool:
    """Photo of the supplier's invoice. Moves a pending order to ORDERED."""
    if not photo_url:
        return False
    if p.status == Procurement.Status.RECEIVED or p.invoice_photo_url:
        return False
    p.status = Procurement.Status.ORDERED
    p.invoice_photo_url = photo_url
    p.save(update_fields=["status", "invoice_photo_url"])
    return True


def receive_goods(p: Procurement, photo_url: str, now: datetime | None = None) -> bool:
    """Photo of the delivered goods; requires the invoice to be on file."""
    if not photo_url:
        return False
    if p.status != Procurement.Status.ORDERED or not p.invoice_photo_url:
        return False
    p.status = Procurement.Status.RECEIVED
    p.photo_url = photo_url
    p.date = now or timezone.now()
    p.save(update_fields=["status", "photo_url", "date"])
    return True


def edit_supplier(p: Procurement, supplier: str) -> Procurement:
    supplier = (supplier or "").strip()
    if not supplier:
        raise ProcurementError("Supplier wajib diisi.")
    p.supplier = supplier
    p.save(update_fields=["supplier"])
    return p


def edit_price(p: Procurement, price) -> Procurement:
    """Reprices the first line and recomputes the total from it."""
    if not p.items:
        raise ProcurementError("Pesanan tidak memiliki barang.")
    new_price = _decimal(price, "Harga")
    items = [dict(line) for line in p.items]
    items[0]["price"] = _num(new_price)
    p.items = items
    p.total_price = _decimal(items[0].get("quantity"), "Jumlah") * new_price
    p.save(update_fields=["items", "total_price"])
    return p
