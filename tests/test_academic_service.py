"""Tests for the academic record service functions."""
import asyncio
from datetime import date

from mwangaza.academics import service, utils
from mwangaza.academics.schemas import AcademicRecordCreate


def add_record(client_id, score, subject_id="s1", assessed=date(2023, 3, 15)):
    return asyncio.run(service.add_academic_record(client_id, AcademicRecordCreate(
        subject_id=subject_id, score=score, assessment_date=assessed, comments="Showing improvement",
    )))


def test_add_record_computes_grade_and_subject_name():
    record = add_record("1", 75)
    assert record.grade == "B"
    assert record.subject_name == "Mathematics"
    assert record.client_id == "1"


def test_grade_is_frozen_at_entry_time(monkeypatch):
    first = add_record("1", 85)
    monkeypatch.setattr(utils, "GRADE_THRESHOLDS", [(95, "A+"), (90, "A"), (85, "B"), (75, "C"), (65, "D")])
    later = add_record("1", 85, assessed=date(2023, 4, 1))
    assert (first.grade, later.grade) == ("A", "B")

    monkeypatch.setattr(utils, "GRADE_THRESHOLDS", [(99, "A+"), (98, "A"), (97, "B"), (96, "C"), (95, "D")])
    stored = asyncio.run(service.get_academic_records_by_client_id("1"))
    assert [(record.id, record.grade) for record in stored] == [(later.id, "B"), (first.id, "A")]


def test_records_by_client_newest_first():
    first = add_record("1", 65, assessed=date(2023, 3, 16))
    second = add_record("1", 82, subject_id="s2", assessed=date(2023, 5, 1))
    add_record("2", 40)

    records = asyncio.run(service.get_academic_records_by_client_id("1"))
    assert [record.id for record in records] == [second.id, first.id]
    assert len(asyncio.run(service.get_academic_records())) == 3


def test_unknown_subject_is_rejected():
    assert add_record("1", 70, subject_id="s99") is None
    assert asyncio.run(service.get_academic_records()) == []
