from django.apps import AppConfig

class RowStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rowstore"
    verbose_name = "Remote row store"

    def ready(self):
        # Mirror every repository mutation into the outbox.
        from . import signals
        signals.connect()
