from django.urls import path

from . import views

app_name = "reporting"

urlpatterns = [
    path("dashboard", views.dashboard, name="dashboard"),
    path("activity", views.activity, name="activity"),
    path("activity/<str:kind>/<str:source_id>/delete", views.activity_delete, name="activity_delete"),
    path("gallery", views.gallery, name="gallery"),
]
