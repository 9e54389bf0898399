from django.contrib import admin
from .models import Procurement


@admin.register(Procurement)
class ProcurementAdmin(admin.ModelAdmin):
    list_display = ("date", "supplier", "status", "funding_source", "total_price", "source_menu", "performed_by")
    list_filter = ("status", "funding_source")
    search_fields = ("supplier",)
    date_hierarchy = "date"
    exclude = ("invoice_photo_url", "photo_url")
