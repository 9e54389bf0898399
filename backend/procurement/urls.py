from django.urls import path

from . import export, views

app_name = "procurement"

urlpatterns = [
    path("", views.procurement_list, name="list"),
    path("new", views.procurement_create, name="create"),
    path("export.pdf", export.export_procurement_pdf, name="export_pdf"),
    path("<str:procurement_id>/process", views.procurement_process, name="process"),
    path("<str:procurement_id>/invoice", views.procurement_invoice, name="invoice"),
    path("<str:procurement_id>/receive", views.procurement_receive, name="receive"),
    path("<str:procurement_id>/edit", views.procurement_edit, name="edit"),
    path("<str:procurement_id>/delete", views.procurement_delete, name="delete"),
]
