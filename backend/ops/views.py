from django.http import JsonResponse
from django.utils import timezone
from .models import Heartbeat
from rowstore.models import PendingWrite

def healthz(request):
    beat = Heartbeat.objects.filter(key="beat").first()
    beat_ok = False
    if beat:
        beat_ok = (timezone.now() - beat.seen_at).total_seconds() < 180  # <3min
    return JsonResponse({
        "ok": True,
        "celery_beat_ok": beat_ok,
        "rowstore_pending": PendingWrite.objects.filter(status=PendingWrite.Status.PENDING).count(),
        "rowstore_failed": PendingWrite.objects.filter(status=PendingWrite.Status.FAILED).count(),
    })
