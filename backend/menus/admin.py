from django.contrib import admin
from .models import MenuPlan


@admin.register(MenuPlan)
class MenuPlanAdmin(admin.ModelAdmin):
    list_display = ("date", "name", "portions", "performed_by")
    search_fields = ("name",)
    date_hierarchy = "date"
