"""
Key-value namespace used as the application's storage.

Values are kept as JSON text, the way a browser's localStorage keeps them:
writes serialise, reads parse, and a value that cannot be serialised is
rejected at write time. Every key carries a version number that is bumped on
each write so callers can detect stale read-modify-write cycles.
"""

import json
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from mwangaza.core.config import settings
from mwangaza.core.exceptions import ConcurrentUpdateError, StorageError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Base class: JSON encoding, versions and per-key locks"""

    backend = "abstract"

    def __init__(self):
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def lock(self, key: str) -> threading.RLock:
        """Re-entrant lock serialising writers of one key inside this process"""
        with self._locks_guard:
            if key not in self._locks:
                self._locks[key] = threading.RLock()
            return self._locks[key]

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._read(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Corrupt value stored under {key}: {e}") from e

    def set(self, key: str, value: Any, expected_version: Optional[int] = None) -> int:
        """Store value under key and return the new version

        When expected_version is given the write only succeeds if the key is
        still at that version (0 for a key that does not exist yet).
        """
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialise value for {key}: {e}") from e
        return self._write(key, raw, expected_version)

    def contains(self, key: str) -> bool:
        return self._read(key) is not None

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def version(self, key: str) -> int:
        raise NotImplementedError

    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, raw: str, expected_version: Optional[int]) -> int:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Process-local store"""

    backend = "memory"

    def __init__(self):
        super().__init__()
        self._data: Dict[str, str] = {}
        # Versions survive remove() so a writer holding a pre-removal version still fails
        self._versions: Dict[str, int] = {}
        self._guard = threading.Lock()

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, raw: str, expected_version: Optional[int]) -> int:
        with self._guard:
            current = self.version(key)
            if expected_version is not None and expected_version != current:
                raise ConcurrentUpdateError(key, expected_version, current)
            self._data[key] = raw
            self._versions[key] = current + 1
            return current + 1

    def remove(self, key: str) -> None:
        with self._guard:
            if key in self._data:
                del self._data[key]
                self._versions[key] = self._versions.get(key, 0) + 1

    def version(self, key: str) -> int:
        return self._versions.get(key, 0)


class SqlStore(KeyValueStore):
    """Durable store: one store_entries row per key"""

    backend = "sql"

    def __init__(self, engine=None):
        super().__init__()
        from mwangaza.db.database import get_engine, init_db

        self.engine = engine or get_engine()
        init_db(self.engine)
        self._session_factory = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    @contextmanager
    def _session(self):
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Database error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _read(self, key: str) -> Optional[str]:
        from mwangaza.db.models import StoreEntry

        with self._session() as session:
            entry = session.get(StoreEntry, key)
            return entry.value if entry else None

    def _write(self, key: str, raw: str, expected_version: Optional[int]) -> int:
        from mwangaza.db.models import StoreEntry

        with self._session() as session:
            entry = session.get(StoreEntry, key)
            if entry is None:
                if expected_version not in (None, 0):
                    raise ConcurrentUpdateError(key, expected_version, 0)
                session.add(StoreEntry(key=key, value=raw, version=1))
                return 1

            if expected_version is None:
                entry.value = raw
                entry.version = entry.version + 1
                return entry.version

            # Conditional update so a concurrent writer in another process is detected
            result = session.execute(
                update(StoreEntry)
                .where(StoreEntry.key == key, StoreEntry.version == expected_version)
                .values(value=raw, version=StoreEntry.version + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise ConcurrentUpdateError(key, expected_version, entry.version)
            return expected_version + 1

    def remove(self, key: str) -> None:
        from mwangaza.db.models import StoreEntry

        with self._session() as session:
            entry = session.get(StoreEntry, key)
            if entry is not None and entry.value is not None:
                entry.value = None
                entry.version = entry.version + 1

    def version(self, key: str) -> int:
        from mwangaza.db.models import StoreEntry

        with self._session() as session:
            entry = session.get(StoreEntry, key)
            return entry.version if entry else 0


_store: Optional[KeyValueStore] = None


def build_store(backend: Optional[str] = None) -> KeyValueStore:
    backend = backend or settings.STORE_BACKEND
    if backend == "memory":
        return MemoryStore()
    if backend == "sql":
        return SqlStore()
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


def get_store() -> KeyValueStore:
    """Get the process-wide store (singleton)"""
    global _store
    if _store is None:
        _store = build_store()
        logger.info("Using %s store backend", _store.backend)
    return _store


def set_store(store: Optional[KeyValueStore]) -> None:
    """Replace the process-wide store (None rebuilds it from settings on next use)"""
    global _store
    _store = store
