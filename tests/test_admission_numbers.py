"""Tests for admission number generation and allocation."""
import threading

import pytest

from mwangaza.clients.sequence import AdmissionSequence
from mwangaza.clients.utils import admission_sequence, format_admission_number, next_admission_number
from mwangaza.db.query import ADMISSION_SEQUENCES_KEY
from mwangaza.db.store import MemoryStore


def test_first_number_of_the_year():
    assert next_admission_number([], 2024) == "MWZ2024001"


def test_increments_highest_number():
    existing = ["MWZ2024003", "MWZ2024017", "MWZ2024009"]
    assert next_admission_number(existing, 2024) == "MWZ2024018"


def test_other_years_are_ignored():
    existing = ["MWZ2023050", "MWZ2025001", "MWZ2024002"]
    assert next_admission_number(existing, 2024) == "MWZ2024003"
    assert next_admission_number(["MWZ2023050"], 2024) == "MWZ2024001"


def test_blank_numbers_are_skipped():
    assert next_admission_number(["", None, "MWZ2024001"], 2024) == "MWZ2024002"


def test_custom_prefix():
    assert next_admission_number(["ABC2024004"], 2024, prefix="ABC") == "ABC2024005"


@pytest.mark.parametrize("number, expected", [
    ("MWZ2024017", 17),
    ("MWZ2023017", 0),
    ("MWZ2024abc", 0),
    ("", 0),
])
def test_admission_sequence(number, expected):
    assert admission_sequence(number, 2024) == expected


def test_format_pads_to_three_digits():
    assert format_admission_number(2024, 7) == "MWZ2024007"
    assert format_admission_number(2024, 1234) == "MWZ20241234"


class TestAdmissionSequence:
    def setup_method(self):
        self.kv = MemoryStore()
        self.sequence = AdmissionSequence(store=self.kv)

    def test_allocates_consecutive_numbers(self):
        assert self.sequence.allocate(2024) == "MWZ2024001"
        assert self.sequence.allocate(2024) == "MWZ2024002"
        assert self.kv.get(ADMISSION_SEQUENCES_KEY) == {"2024": 2}

    def test_years_are_independent(self):
        self.sequence.allocate(2024)
        assert self.sequence.allocate(2025) == "MWZ2025001"
        assert self.sequence.allocate(2024) == "MWZ2024002"

    def test_seeded_from_existing_numbers(self):
        assert self.sequence.allocate(2024, ["MWZ2024017", "MWZ2023099"]) == "MWZ2024018"
        # The counter never goes backwards
        assert self.sequence.allocate(2024, ["MWZ2024003"]) == "MWZ2024019"

    def test_concurrent_allocations_are_unique(self):
        numbers = []
        lock = threading.Lock()

        def worker():
            for _ in range(10):
                number = self.sequence.allocate(2024)
                with lock:
                    numbers.append(number)

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(set(numbers)) == 60
        assert max(numbers) == "MWZ2024060"
