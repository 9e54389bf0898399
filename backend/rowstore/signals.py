"""Observer: every save/delete of a mirrored model queues a PendingWrite.

Repositories never talk to the hosted store; the flush task does.
"""

from __future__ import annotations

import contextlib
import logging
import threading

from django.apps import apps
from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_delete, post_save

from .models import PendingWrite
from .rows import TABLES, table_for

log = logging.getLogger(__name__)

_state = threading.local()


@contextlib.contextmanager
def mirroring_suspended():
    """Local writes made inside this block are not queued (used while pulling)."""
    previous = getattr(_state, "suspended", False)
    _state.suspended = True
    try:
        yield
    finally:
        _state.suspended = previous


def _suspended() -> bool:
    return getattr(_state, "suspended", False)


def _schedule_flush():
    from .tasks import flush_pending_writes
    try:
        flush_pending_writes.delay()
    except Exception as e:  # broker down: beat picks the rows up later
        log.warning("rowstore flush not enqueued: %s", e)


def queue_write(table: str, row_id: str, op: str) -> PendingWrite:
    pw = PendingWrite.objects.create(table=table, row_id=str(row_id), op=op)
    if settings.ROWSTORE_FLUSH_ON_COMMIT:
        transaction.on_commit(_schedule_flush)
    return pw


def _on_save(sender, instance, created, **kwargs):
    if kwargs.get("raw") or _suspended():
        return
    update_fields = kwargs.get("update_fields")
    if update_fields and set(update_fields) <= {"last_login"}:
        return
    queue_write(table_for(sender), instance.pk, PendingWrite.Op.UPSERT)


def _on_delete(sender, instance, **kwargs):
    if _suspended() or instance.pk is None:
        return
    queue_write(table_for(sender), instance.pk, PendingWrite.Op.DELETE)


def connect():
    for table, label in TABLES.items():
        model = apps.get_model(label)
        post_save.connect(_on_save, sender=model, dispatch_uid=f"rowstore-save-{table}")
        post_delete.connect(_on_delete, sender=model, dispatch_uid=f"rowstore-delete-{table}")
