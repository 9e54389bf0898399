from django.contrib import admin
from .models import Heartbeat, SnapshotBackup


@admin.register(Heartbeat)
class HeartbeatAdmin(admin.ModelAdmin):
    list_display = ("key", "seen_at")


@admin.register(SnapshotBackup)
class SnapshotBackupAdmin(admin.ModelAdmin):
    list_display = ("created_at", "location", "size_bytes")
    readonly_fields = ("created_at", "location", "size_bytes", "counts")
