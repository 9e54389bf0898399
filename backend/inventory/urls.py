from django.urls import path

from . import export, views

app_name = "inventory"

urlpatterns = [
    path("", views.stock_list, name="list"),
    path("new", views.stock_save, name="create"),
    path("transactions", views.transaction_list, name="transactions"),
    path("export.pdf", export.export_stock_pdf, name="export_pdf"),
    path("<str:item_id>", views.stock_save, name="update"),
    path("<str:item_id>/mutate", views.stock_mutate, name="mutate"),
    path("<str:item_id>/delete", views.stock_delete, name="delete"),
]
