import requests
from django.conf import settings

from .base import RowStoreError, RowStoreProvider


class SupabaseProvider(RowStoreProvider):
    """
    Hosted Postgres tables through the PostgREST endpoint.
    Requires:
      SUPABASE_URL, SUPABASE_KEY
    """
    def __init__(self):
        self.base_url = (settings.SUPABASE_URL or "").rstrip("/")
        self.key = settings.SUPABASE_KEY
        self.timeout = settings.ROWSTORE_TIMEOUT
        if not self.base_url or not self.key:
            raise RuntimeError("Supabase provider missing SUPABASE_URL/SUPABASE_KEY")

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _headers(self, **extra) -> dict:
        headers = {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Content-Type": "application/json",
        }
        headers.update(extra)
        return headers

    def select_all(self, table):
        r = requests.get(self._url(table), params={"select": "*"}, headers=self._headers(), timeout=self.timeout)
        r.raise_for_status()
        try:
            data = r.json()
        except ValueError:
            raise RowStoreError(f"{table}: response is not JSON")
        if not isinstance(data, list):
            raise RowStoreError(f"{table}: unexpected payload")
        return data

    def upsert(self, table, rows):
        if not rows:
            return
        r = requests.post(
            self._url(table),
            params={"on_conflict": "id"},
            json=rows,
            headers=self._headers(Prefer="resolution=merge-duplicates,return=minimal"),
            timeout=self.timeout,
        )
        r.raise_for_status()

    def delete(self, table, row_id):
        r = requests.delete(self._url(table), params={"id": f"eq.{row_id}"}, headers=self._headers(),
                            timeout=self.timeout)
        r.raise_for_status()
