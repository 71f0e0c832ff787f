"""
Academics - Service Functions

Records are written with the grade in force at entry time and never
re-graded afterwards.
"""

import logging
from typing import List, Optional
from uuid import uuid4

from mwangaza.db.query import ACADEMIC_RECORDS_KEY
from mwangaza.db.repository import Repository
from mwangaza.academics.schemas import AcademicRecord, AcademicRecordCreate
from mwangaza.academics.utils import calculate_grade, get_subject

logger = logging.getLogger(__name__)

academic_records_table = Repository(ACADEMIC_RECORDS_KEY)


def row_to_record(row: dict) -> AcademicRecord:
    return AcademicRecord.model_validate(row)


async def get_academic_records() -> List[AcademicRecord]:
    try:
        return [row_to_record(row) for row in academic_records_table.list()]
    except Exception:
        logger.exception("Error fetching academic records")
        return []


async def get_academic_records_by_client_id(client_id: str) -> List[AcademicRecord]:
    """Records of one client, most recent assessment first"""
    try:
        records = [
            row_to_record(row) for row in academic_records_table.list()
            if row.get("clientId") == client_id
        ]
    except Exception:
        logger.exception("Error fetching academic records for client %s", client_id)
        return []
    return sorted(records, key=lambda record: record.assessment_date, reverse=True)


async def add_academic_record(client_id: str, data: AcademicRecordCreate) -> Optional[AcademicRecord]:
    subject = get_subject(data.subject_id)
    if subject is None:
        logger.warning("Unknown subject %r for client %s", data.subject_id, client_id)
        return None

    record = AcademicRecord(
        id=str(uuid4()),
        client_id=client_id,
        subject_id=subject.id,
        subject_name=subject.name,
        score=data.score,
        grade=calculate_grade(data.score),
        assessment_date=data.assessment_date,
        comments=data.comments,
    )
    try:
        academic_records_table.insert(record.model_dump(mode="json", by_alias=True))
    except Exception:
        logger.exception("Error adding academic record for client %s", client_id)
        return None
    return record
