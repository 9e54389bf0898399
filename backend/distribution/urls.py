from django.urls import path

from . import export, views

app_name = "distribution"

urlpatterns = [
    path("", views.distribution_list, name="list"),
    path("destinations", views.destination_list, name="destinations"),
    path("bulk", views.distribution_bulk_create, name="bulk_create"),
    path("clear-history", views.distribution_clear_history, name="clear_history"),
    path("notes.pdf", export.export_delivery_notes, name="notes_pdf"),
    path("surat-jalan.pdf", export.export_surat_jalan, name="surat_jalan_pdf"),
    path("<str:distribution_id>/start", views.distribution_start, name="start"),
    path("<str:distribution_id>/confirm", views.distribution_confirm, name="confirm"),
    path("<str:distribution_id>/pickup", views.distribution_pickup_start, name="pickup_start"),
    path("<str:distribution_id>/pickup/finish", views.distribution_pickup_finish, name="pickup_finish"),
    path("<str:distribution_id>/cancel", views.distribution_cancel, name="cancel"),
]
