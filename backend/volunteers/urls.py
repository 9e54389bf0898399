from django.urls import path

from . import views

app_name = "volunteers"

urlpatterns = [
    path("", views.volunteer_list, name="list"),
    path("new", views.volunteer_save, name="create"),
    path("<str:volunteer_id>", views.volunteer_save, name="update"),
    path("<str:volunteer_id>/delete", views.volunteer_delete, name="delete"),
]
