from django.contrib import admin

from .models import PendingWrite


@admin.action(description="Retry (reset to PENDING)")
def _retry(modeladmin, request, queryset):
    queryset.update(status=PendingWrite.Status.PENDING, attempts=0, last_error="")


@admin.register(PendingWrite)
class PendingWriteAdmin(admin.ModelAdmin):
    list_display = ("created_at", "table", "row_id", "op", "status", "attempts", "sent_at")
    list_filter = ("status", "table", "op")
    search_fields = ("row_id", "last_error")
    actions = [_retry]
