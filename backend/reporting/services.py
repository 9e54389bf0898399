"""Dashboard figures and the activity feed, recomputed from the current records."""

from __future__ import annotations

from datetime import date

from django.conf import settings
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from audit.utils import audit_log
from distribution.destinations import destinations
from distribution.models import Distribution
from distribution.services import distributions_for_day
from inventory.models import StockItem, StockTransaction
from menus.models import MenuPlan
from procurement.models import Procurement
from reporting.letterhead import number, rupiah
from sppg.dates import MONTHS_ID

SCOPE_ALL = "ALL"
SCOPE_LOCATIONS = "LOCATIONS"  # deliveries only

TYPE_MUTASI = "MUTASI"
TYPE_MENU = "MENU"
TYPE_PEMBELIAN = "PEMBELIAN"
TYPE_DISTRIBUSI = "DISTRIBUSI"

ACTIVITY_SOURCES = {
    TYPE_MUTASI: StockTransaction,
    TYPE_MENU: MenuPlan,
    TYPE_PEMBELIAN: Procurement,
    TYPE_DISTRIBUSI: Distribution,
}

DELIVERED_STATUSES = [Distribution.Status.DELIVERED, Distribution.Status.PICKING_UP, Distribution.Status.PICKED_UP]


def _entry(source_id, target_id, kind, title, subtitle, timestamp, value, performed_by) -> dict:
    return {
        "id": f"{source_id}-{kind.lower()}",
        "source_id": source_id,
        "target_id": target_id,
        "type": kind,
        "title": title,
        "subtitle": subtitle,
        "timestamp": timestamp,
        "value": value,
        "performed_by": performed_by.username if performed_by else None,
    }


def activity_feed(scope: str = SCOPE_ALL) -> list[dict]:
    """Newest first. Scope LOCATIONS keeps only deliveries that have left the kitchen."""
    logs = []
    if scope == SCOPE_ALL:
        for t in StockTransaction.objects.select_related("performed_by"):
            inbound = t.kind == StockTransaction.Kind.IN
            logs.append(_entry(
                t.id, t.item_id, TYPE_MUTASI,
                f"{'Stok Masuk' if inbound else 'Stok Keluar'}: {t.item_name or 'Item'}",
                t.notes or "Update Inventori",
                t.date, f"{'+' if inbound else '-'}{number(t.quantity)}", t.performed_by,
            ))
        for m in MenuPlan.objects.select_related("performed_by"):
            local = timezone.localtime(m.date)
            scheduled = f"{local.day} {MONTHS_ID[local.month - 1][:3]}"
            logs.append(_entry(
                m.id, m.id, TYPE_MENU, f"Menu: {m.name or 'Tanpa Nama'}", f"Jadwal: {scheduled}",
                m.created_at, f"{m.portions} Porsi", m.performed_by,
            ))
        for p in Procurement.objects.select_related("performed_by").exclude(total_price=0):
            logs.append(_entry(
                p.id, p.id, TYPE_PEMBELIAN, p.first_item.get("name") or "Pembelian",
                f"Vendor: {p.supplier or '-'}", p.date, f"IDR {rupiah(p.total_price)}", p.performed_by,
            ))
    moving = Distribution.objects.select_related("performed_by").exclude(status=Distribution.Status.PREPARING)
    for d in moving:
        logs.append(_entry(
            d.id, d.id, TYPE_DISTRIBUSI, d.destination or "Tujuan", f"Driver: {d.driver_name or '-'}",
            d.activity_time, f"{d.portions} Porsi", d.performed_by,
        ))
    logs.sort(key=lambda e: e["timestamp"], reverse=True)
    return logs


@transaction.atomic
def delete_activity(kind: str, source_id: str, actor=None, request=None) -> bool:
    """Deletes the record behind a feed entry."""
    model = ACTIVITY_SOURCES.get(kind)
    if model is None:
        return False
    obj = model.objects.filter(pk=source_id).first()
    if obj is None:
        return False
    audit_log(actor, "ACTIVITY_DELETED", target=obj, payload={"type": kind}, request=request)
    obj.delete()
    return True


def dashboard_summary(day: date | None = None) -> dict:
    qs = distributions_for_day(day) if day else Distribution.objects.all()
    delivered = qs.filter(status__in=DELIVERED_STATUSES).aggregate(n=Sum("portions"))["n"] or 0
    picked_up = qs.aggregate(n=Sum("picked_up_count"))["n"] or 0
    target = settings.DAILY_PORTION_TARGET
    percentage = min(round(delivered / target * 100), 100) if target else 0
    return {
        "locations": len(destinations()),
        "portion_target": target,
        "portions_delivered": delivered,
        "containers_picked_up": picked_up,
        "delivery_percentage": percentage,
        "item_count": StockItem.objects.count(),
        "critical_items": [i.name for i in StockItem.objects.all() if i.is_critical],
    }


def photo_gallery() -> list[dict]:
    items = []
    for d in Distribution.objects.exclude(photo_url=""):
        items.append({"url": d.photo_url, "label": d.destination, "date": d.delivered_at or d.timestamp,
                      "type": "DISTRIBUSI", "source_id": d.id})
    for p in Procurement.objects.exclude(photo_url="", invoice_photo_url=""):
        name = p.first_item.get("name")
        if p.photo_url:
            items.append({"url": p.photo_url, "label": name or "Barang", "date": p.date,
                          "type": "TERIMA BARANG", "source_id": p.id})
        if p.invoice_photo_url:
            items.append({"url": p.invoice_photo_url, "label": f"Nota {name or ''}".strip(), "date": p.date,
                          "type": "INVOICE", "source_id": p.id})
    items.sort(key=lambda i: i["date"], reverse=True)
    return items
