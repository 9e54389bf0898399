import logging
from celery import shared_task

from .services import flush

log = logging.getLogger(__name__)


@shared_task(bind=True, ignore_result=True)
def flush_pending_writes(self, limit: int = 500):
    stats = flush(limit=limit)
    if stats["sent"] or stats["failed"]:
        log.info("rowstore flush: %s", stats)
    return stats
