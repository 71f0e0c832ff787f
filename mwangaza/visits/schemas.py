"""
Home Visits - Pydantic Schemas
"""

from datetime import date
from typing import Literal, Optional

from pydantic import Field

from mwangaza.clients.schemas import CamelModel


ReportPeriod = Literal["all", "last-week", "last-month"]


class HomeVisitCreate(CamelModel):
    client_id: str = Field(..., min_length=1)
    date: date
    conducted_by: str = Field(..., min_length=1, max_length=255)
    summary: str = Field(..., min_length=1)
    recommendations: Optional[str] = None


class HomeVisit(HomeVisitCreate):
    id: str


class HomeVisitRequest(CamelModel):
    """New visit report; the author is the signed-in staff member"""
    client_id: str = Field(..., min_length=1)
    date: date
    summary: str = Field(..., min_length=1)
    recommendations: Optional[str] = None
