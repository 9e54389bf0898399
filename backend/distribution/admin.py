from django.contrib import admin, messages

from .models import Distribution


@admin.action(description="Start delivery (PREPARING -> ON_DELIVERY)")
def _start_delivery(modeladmin, request, queryset):
    from .services import start_delivery
    moved = sum(1 for d in queryset if start_delivery(d, actor=request.user))
    modeladmin.message_user(request, f"{moved} distribution(s) on delivery.", messages.SUCCESS)


@admin.action(description="Start pickup (DELIVERED -> PICKING_UP)")
def _start_pickup(modeladmin, request, queryset):
    from .services import start_pickup
    moved = sum(1 for d in queryset if start_pickup(d, actor=request.user))
    modeladmin.message_user(request, f"{moved} distribution(s) being picked up.", messages.SUCCESS)


@admin.action(description="Cancel (only cancellable statuses)")
def _cancel(modeladmin, request, queryset):
    from .services import cancel_distribution
    removed = sum(1 for d in list(queryset) if cancel_distribution(d, actor=request.user, request=request))
    modeladmin.message_user(request, f"{removed} distribution(s) cancelled.", messages.SUCCESS)


@admin.register(Distribution)
class DistributionAdmin(admin.ModelAdmin):
    list_display = ("serial_number", "destination", "portions", "status", "driver_name", "timestamp",
                    "delivered_at", "picked_up_count")
    list_filter = ("status",)
    search_fields = ("serial_number", "destination", "recipient_name", "driver_name")
    date_hierarchy = "timestamp"
    # fixed at creation or set by the lifecycle; records are planned through the bulk endpoint only
    readonly_fields = ("serial_number", "destination", "recipient_name", "portions", "driver_name",
                       "pickup_driver_name", "status", "timestamp", "sent_at", "delivered_at",
                       "pickup_started_at", "picked_up_at", "picked_up_count", "location")
    exclude = ("photo_url",)
    actions = [_start_delivery, _start_pickup, _cancel]

    def has_add_permission(self, request):
        return False
