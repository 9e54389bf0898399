from django.db import models
from django.utils import timezone


class PendingWrite(models.Model):
    """Outbox row: one local change waiting to be pushed to the hosted row store."""

    class Op(models.TextChoices):
        UPSERT = "UPSERT", "Upsert"
        DELETE = "DELETE", "Delete"

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        SENT = "SENT", "Sent"
        SUPERSEDED = "SUPERSEDED", "Superseded"
        FAILED = "FAILED", "Failed"

    table = models.CharField(max_length=32)
    row_id = models.CharField(max_length=64)
    op = models.CharField(max_length=8, choices=Op.choices)
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDING, db_index=True)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="rowstore_status_created_idx"),
            models.Index(fields=["table", "row_id"], name="rowstore_table_row_idx"),
        ]

    def __str__(self):
        return f"{self.op} {self.table}/{self.row_id} ({self.status})"
