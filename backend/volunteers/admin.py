from django.contrib import admin
from .models import Volunteer


@admin.register(Volunteer)
class VolunteerAdmin(admin.ModelAdmin):
    list_display = ("name", "division", "phone", "status", "is_coordinator", "user", "joined_at")
    list_filter = ("division", "status", "is_coordinator")
    search_fields = ("name", "phone", "user__username")
    raw_id_fields = ("user",)
