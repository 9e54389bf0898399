from django.contrib import admin
from .models import StockItem, StockTransaction


@admin.register(StockItem)
class StockItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "item_type", "quantity", "unit", "min_threshold", "last_updated")
    list_filter = ("item_type", "category")
    search_fields = ("name",)


@admin.register(StockTransaction)
class StockTransactionAdmin(admin.ModelAdmin):
    list_display = ("date", "item_name", "kind", "quantity", "notes", "performed_by")
    list_filter = ("kind",)
    search_fields = ("item_name", "notes")
    date_hierarchy = "date"

    # Ledger rows are append-only.
    def has_change_permission(self, request, obj=None):
        return False
