from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from inventory.models import StockItem
from .models import MenuPlan


class MenuPlanError(Exception): ...


def _quantity(raw) -> float:
    try:
        q = Decimal(str(raw if raw not in (None, "") else 0))
    except InvalidOperation:
        raise MenuPlanError("Jumlah bahan tidak valid.")
    if not q.is_finite() or q < 0:
        raise MenuPlanError("Jumlah bahan tidak valid.")
    return float(q)


def resolve_ingredients(lines) -> list[dict]:
    """Ingredient lines picked from stock take the stock item's name and unit."""
    resolved = []
    for line in lines or []:
        if not isinstance(line, dict):
            raise MenuPlanError("Format bahan tidak valid.")
        item_id = line.get("item_id")
        if item_id:
            item = StockItem.objects.filter(pk=item_id).first()
            if item is None:
                raise MenuPlanError(f"Barang {item_id} tidak ditemukan.")
            name, unit = item.name, item.unit
        else:
            name = (line.get("name") or "").strip()
            unit = (line.get("unit") or "").strip() or "Unit"
        if not name:
            raise MenuPlanError("Nama bahan wajib diisi.")
        resolved.append({"name": name, "quantity": _quantity(line.get("quantity")), "unit": unit})
    return resolved


@transaction.atomic
def create_menu_plan(*, name: str, portions: int, ingredients, actor=None,
                     now: datetime | None = None) -> MenuPlan:
    now = now or timezone.now()
    name = (name or "").strip()
    lines = resolve_ingredients(ingredients)
    if not name or not lines:
        raise MenuPlanError("Nama menu dan minimal satu bahan wajib diisi.")
    return MenuPlan.objects.create(
        date=now,
        name=name,
        portions=portions or 0,
        ingredients=lines,
        created_at=now,
        performed_by=actor if getattr(actor, "is_authenticated", False) else None,
    )
