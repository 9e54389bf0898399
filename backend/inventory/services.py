"""Stock mutation arithmetic.

Every mutation writes exactly one StockTransaction. OUT removes at most what
is on hand and records the amount actually removed, so the ledger always sums
to the current quantity.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from .models import StockItem, StockTransaction

log = logging.getLogger(__name__)

MODE_IN = "IN"
MODE_OUT = "OUT"
MODE_OPNAME = "OPNAME"
MODES = (MODE_IN, MODE_OUT, MODE_OPNAME)

DEFAULT_NOTE = "Mutasi Manual"
OPNAME_NOTE = "Update Stok Opname"


class StockMutationError(Exception):
    """Rejected mutation; nothing was written."""


def compute_mutation(current: Decimal, mode: str, amount: Decimal) -> tuple[Decimal, str, Decimal]:
    """
    Returns (new quantity, transaction kind, recorded magnitude).
    Pure; validation of `amount` is the caller's job.
    """
    if mode == MODE_IN:
        return current + amount, StockTransaction.Kind.IN, amount
    if mode == MODE_OUT:
        removed = min(amount, current)
        return current - removed, StockTransaction.Kind.OUT, removed
    if mode == MODE_OPNAME:
        kind = StockTransaction.Kind.IN if amount >= current else StockTransaction.Kind.OUT
        return amount, kind, abs(amount - current)
    raise StockMutationError(f"Unknown mode {mode!r}")


@transaction.atomic
def apply_stock_mutation(item: StockItem, mode: str, amount, actor=None, notes: str = "",
                         now: datetime | None = None) -> StockTransaction:
    now = now or timezone.now()
    if mode not in MODES:
        raise StockMutationError(f"Unknown mode {mode!r}")
    try:
        amount = Decimal(str(amount))
    except ArithmeticError:
        raise StockMutationError("Jumlah tidak valid.")
    if not amount.is_finite():
        raise StockMutationError("Jumlah tidak valid.")
    if mode == MODE_OPNAME:
        if amount < 0:
            raise StockMutationError("Jumlah opname tidak boleh negatif.")
    elif amount <= 0:
        raise StockMutationError("Jumlah harus lebih dari nol.")

    locked = StockItem.objects.select_for_update().get(pk=item.pk)
    new_qty, kind, magnitude = compute_mutation(locked.quantity, mode, amount)

    locked.quantity = max(new_qty, Decimal("0"))
    locked.last_updated = now
    locked.save(update_fields=["quantity", "last_updated"])

    if not notes:
        notes = OPNAME_NOTE if mode == MODE_OPNAME else DEFAULT_NOTE
    tx = StockTransaction.objects.create(
        item=locked,
        item_name=locked.name,
        kind=kind,
        quantity=magnitude,
        date=now,
        notes=notes,
        performed_by=actor if getattr(actor, "is_authenticated", False) else None,
    )
    if mode == MODE_OUT and magnitude < amount:
        log.info("stock OUT on %s clamped: requested %s, removed %s", locked.name, amount, magnitude)

    item.quantity = locked.quantity
    item.last_updated = locked.last_updated
    return tx


def find_by_name(name: str) -> StockItem | None:
    return StockItem.objects.filter(name__iexact=(name or "").strip()).first()


def critical_items():
    return [i for i in StockItem.objects.all() if i.is_critical]
