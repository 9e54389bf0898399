import copy
from .base import RowStoreProvider


class MockProvider(RowStoreProvider):
    """In-process store shared by every instance; handy for local runs and tests."""

    tables: dict = {}

    @classmethod
    def reset(cls):
        cls.tables = {}

    def select_all(self, table):
        return [copy.deepcopy(r) for r in self.tables.get(table, {}).values()]

    def upsert(self, table, rows):
        bucket = self.tables.setdefault(table, {})
        for row in rows:
            bucket[row["id"]] = copy.deepcopy(row)

    def delete(self, table, row_id):
        self.tables.get(table, {}).pop(row_id, None)
