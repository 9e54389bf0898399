from abc import ABC, abstractmethod
from typing import Dict, List


class RowStoreError(Exception):
    """The hosted store rejected or could not complete a call."""


class RowStoreProvider(ABC):
    @abstractmethod
    def select_all(self, table: str) -> List[Dict]:
        raise NotImplementedError

    @abstractmethod
    def upsert(self, table: str, rows: List[Dict]) -> None:
        """Insert-or-replace keyed by `id`."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, table: str, row_id: str) -> None:
        raise NotImplementedError
