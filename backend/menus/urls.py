from django.urls import path

from . import export, views

app_name = "menus"

urlpatterns = [
    path("", views.menu_list, name="list"),
    path("new", views.menu_create, name="create"),
    path("<str:menu_id>/delete", views.menu_delete, name="delete"),
    path("<str:menu_id>/export.pdf", export.export_menu_pdf, name="export_pdf"),
]
