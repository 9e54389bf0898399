from django.conf import settings


def get_provider():
    prov = (settings.ROWSTORE_PROVIDER or "mock").lower()
    if prov == "supabase":
        from .supabase import SupabaseProvider
        return SupabaseProvider()
    else:
        from .mock import MockProvider
        return MockProvider()
