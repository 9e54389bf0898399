import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sppg.settings")

app = Celery("sppg")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
