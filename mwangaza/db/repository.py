"""
Row-level access to one stored table.

Each write is a read-modify-write of the table's list, done while holding the
key's lock and committed with the version that was read, so two writers can
never silently overwrite each other.
"""

from typing import Callable, List, Optional

from mwangaza.core.exceptions import RecordNotFoundError
from mwangaza.db.store import KeyValueStore, get_store


class Repository:
    def __init__(self, key: str, store: Optional[KeyValueStore] = None):
        self.key = key
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store or get_store()

    def list(self) -> List[dict]:
        return self.store.get(self.key, [])

    def get_by_id(self, record_id: str) -> Optional[dict]:
        for row in self.list():
            if row.get("id") == record_id:
                return row
        return None

    def insert(self, row: dict) -> dict:
        return self.insert_many([row])[0]

    def insert_many(self, rows: List[dict]) -> List[dict]:
        def apply(current: List[dict]) -> List[dict]:
            current.extend(rows)
            return rows

        return self._mutate(apply)

    def update(self, record_id: str, changes: dict) -> dict:
        """Merge changes into the row with record_id"""
        def apply(current: List[dict]) -> dict:
            index = self._index_of(current, record_id)
            current[index] = {**current[index], **changes}
            return current[index]

        return self._mutate(apply)

    def replace(self, record_id: str, row: dict) -> dict:
        def apply(current: List[dict]) -> dict:
            index = self._index_of(current, record_id)
            current[index] = {**row, "id": record_id}
            return current[index]

        return self._mutate(apply)

    def delete(self, record_id: str) -> dict:
        def apply(current: List[dict]) -> dict:
            return current.pop(self._index_of(current, record_id))

        return self._mutate(apply)

    def _index_of(self, rows: List[dict], record_id: str) -> int:
        for index, row in enumerate(rows):
            if row.get("id") == record_id:
                return index
        raise RecordNotFoundError(self.key, record_id)

    def _mutate(self, apply: Callable[[List[dict]], object]):
        store = self.store
        with store.lock(self.key):
            version = store.version(self.key)
            current = store.get(self.key, [])
            result = apply(current)
            store.set(self.key, current, expected_version=version)
        return result
