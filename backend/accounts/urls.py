from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    path("auth/login", views.login_view, name="login"),
    path("auth/logout", views.logout_view, name="logout"),
    path("auth/whoami", views.whoami, name="whoami"),
    path("staff/", views.staff_list, name="staff_list"),
    path("staff/new", views.staff_save, name="staff_create"),
    path("staff/<str:user_id>", views.staff_save, name="staff_update"),
    path("staff/<str:user_id>/delete", views.staff_delete, name="staff_delete"),
]
