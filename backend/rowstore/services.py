"""Push queued writes to the hosted row store and pull it back on full sync.

Remote failures never touch local state: the outbox row keeps its error and
attempt count and is retried by the next flush, up to ROWSTORE_MAX_ATTEMPTS.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from .models import PendingWrite
from .providers import get_provider
from .rows import TABLES, apply_row, model_for, to_row
from .signals import mirroring_suspended, queue_write

log = logging.getLogger(__name__)


def _coalesce(writes) -> tuple[list[PendingWrite], list[PendingWrite]]:
    """Latest write per row, oldest first; plus the older ones it supersedes."""
    latest: OrderedDict = OrderedDict()
    superseded = []
    for w in writes:
        key = (w.table, w.row_id)
        if key in latest:
            superseded.append(latest.pop(key))
        latest[key] = w
    return list(latest.values()), superseded


def _mark_failed(writes, error: Exception):
    max_attempts = settings.ROWSTORE_MAX_ATTEMPTS
    for w in writes:
        w.attempts += 1
        w.last_error = str(error)[:2000]
        if w.attempts >= max_attempts:
            w.status = PendingWrite.Status.FAILED
        w.save(update_fields=["attempts", "last_error", "status", "updated_at"])


def _mark_sent(writes, status=PendingWrite.Status.SENT):
    now = timezone.now()
    for w in writes:
        w.status = status
        w.sent_at = now
        w.last_error = ""
        w.save(update_fields=["status", "sent_at", "last_error", "updated_at"])


def flush(provider=None, limit: int = 500) -> dict:
    """
    Push pending writes oldest first. Upserts go out as one batch per table,
    deletes one row at a time. Returns counts for logging.
    """
    provider = provider or get_provider()
    pending = list(PendingWrite.objects.filter(status=PendingWrite.Status.PENDING)[:limit])
    writes, superseded = _coalesce(pending)
    _mark_sent(superseded, PendingWrite.Status.SUPERSEDED)
    stats = {"sent": 0, "failed": 0, "superseded": len(superseded)}

    upserts: OrderedDict = OrderedDict()
    for w in writes:
        if w.op == PendingWrite.Op.DELETE:
            try:
                provider.delete(w.table, w.row_id)
            except Exception as e:
                log.warning("rowstore delete %s/%s failed: %s", w.table, w.row_id, e)
                _mark_failed([w], e)
                stats["failed"] += 1
            else:
                _mark_sent([w])
                stats["sent"] += 1
            continue
        upserts.setdefault(w.table, []).append(w)

    for table, batch in upserts.items():
        model = model_for(table)
        found = {str(o.pk): o for o in model.objects.filter(pk__in=[w.row_id for w in batch])}
        # a row deleted after its save has a DELETE queued behind it
        live = [w for w in batch if w.row_id in found]
        gone = [w for w in batch if w.row_id not in found]
        _mark_sent(gone, PendingWrite.Status.SUPERSEDED)
        stats["superseded"] += len(gone)
        if not live:
            continue
        try:
            provider.upsert(table, [to_row(found[w.row_id]) for w in live])
        except Exception as e:
            log.warning("rowstore upsert of %d %s row(s) failed: %s", len(live), table, e)
            _mark_failed(live, e)
            stats["failed"] += len(live)
        else:
            _mark_sent(live)
            stats["sent"] += len(live)
    return stats


def pull_all(provider=None) -> dict:
    """Full sync: every remote row replaces the local one with the same id."""
    provider = provider or get_provider()
    counts = {}
    with mirroring_suspended():
        for table in TABLES:
            rows = provider.select_all(table)
            applied = 0
            for row in rows:
                try:
                    with transaction.atomic():
                        if apply_row(table, row) is not None:
                            applied += 1
                except IntegrityError as e:
                    log.warning("rowstore pull skipped %s/%s: %s", table, row.get("id"), e)
            counts[table] = applied
    return counts


def push_all() -> int:
    """Queue an upsert for every local row (first sync of an empty remote)."""
    n = 0
    for table in TABLES:
        for pk in model_for(table).objects.values_list("pk", flat=True):
            queue_write(table, pk, PendingWrite.Op.UPSERT)
            n += 1
    return n


def backlog() -> int:
    return PendingWrite.objects.filter(status=PendingWrite.Status.PENDING).count()
