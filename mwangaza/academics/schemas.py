"""
Academics - Pydantic Schemas
"""

from datetime import date
from typing import Optional

from pydantic import Field

from mwangaza.clients.schemas import CamelModel


class Subject(CamelModel):
    id: str
    name: str
    description: Optional[str] = None


class AcademicRecordCreate(CamelModel):
    """Assessment entry; the grade is derived from the score"""
    subject_id: str = Field(..., min_length=1)
    score: int = Field(..., ge=0, le=100)
    assessment_date: date
    comments: Optional[str] = None


class AcademicRecord(CamelModel):
    id: str
    client_id: str
    subject_id: str
    subject_name: str
    score: int
    grade: str
    assessment_date: date
    comments: Optional[str] = None
