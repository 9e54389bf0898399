from django.db import models
from django.utils import timezone

class Heartbeat(models.Model):
    key = models.CharField(max_length=32, unique=True)   # e.g., "beat"
    seen_at = models.DateTimeField(default=timezone.now, db_index=True)
    def __str__(self): return f"{self.key} @ {self.seen_at}"


class SnapshotBackup(models.Model):
    """One JSON snapshot written to a file or uploaded off-site."""
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    location = models.CharField(max_length=512)   # s3://bucket/key or a local path
    size_bytes = models.PositiveBigIntegerField(default=0)
    counts = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self): return f"{self.location} ({self.size_bytes} B)"
