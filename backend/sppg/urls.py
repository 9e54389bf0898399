from django.conf import settings
from django.contrib import admin
from django.urls import path, include

from ops.views import healthz

urlpatterns = [
    path("healthz/", healthz),
    path(f"{settings.ADMIN_URL}/", admin.site.urls),
    path("api/", include("accounts.urls")),
    path("api/volunteers/", include("volunteers.urls")),
    path("api/stock/", include("inventory.urls")),
    path("api/menus/", include("menus.urls")),
    path("api/procurements/", include("procurement.urls")),
    path("api/distributions/", include("distribution.urls")),
    path("api/", include("reporting.urls")),
]
