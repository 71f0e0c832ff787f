"""
Admission number allocation.

Counters are kept per calendar year in the store and incremented under the
key lock with a version check, so two registrations can never receive the
same number.
"""

from typing import Iterable, Optional

from mwangaza.db.query import ADMISSION_SEQUENCES_KEY
from mwangaza.db.store import KeyValueStore, get_store
from mwangaza.clients.utils import admission_sequence, format_admission_number


class AdmissionSequence:
    def __init__(self, store: Optional[KeyValueStore] = None, prefix: Optional[str] = None):
        self._store = store
        self.prefix = prefix

    @property
    def store(self) -> KeyValueStore:
        return self._store or get_store()

    def allocate(self, year: int, existing: Iterable[str] = ()) -> str:
        """Reserve the next admission number for year

        existing seeds the counter so numbers assigned outside the sequence
        (imports, legacy data) are never reused.
        """
        seeded = max((admission_sequence(number, year, self.prefix) for number in existing), default=0)
        store = self.store
        with store.lock(ADMISSION_SEQUENCES_KEY):
            version = store.version(ADMISSION_SEQUENCES_KEY)
            counters = store.get(ADMISSION_SEQUENCES_KEY, {})
            value = max(counters.get(str(year), 0), seeded) + 1
            counters[str(year)] = value
            store.set(ADMISSION_SEQUENCES_KEY, counters, expected_version=version)
        return format_admission_number(year, value, self.prefix)
