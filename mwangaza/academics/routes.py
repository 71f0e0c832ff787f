"""
Academics - API Routes

PROTECTED ENDPOINTS - JWT authentication required
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from mwangaza.auth.routes import get_current_principal, require_access
from mwangaza.auth.schemas import Principal
from mwangaza.clients.service import get_client_by_id
from mwangaza.academics.schemas import AcademicRecord, AcademicRecordCreate, Subject
from mwangaza.academics.service import add_academic_record, get_academic_records_by_client_id
from mwangaza.academics.utils import SUBJECTS, get_subject

router = APIRouter()


@router.get("/api/v1/subjects", response_model=List[Subject])
def list_subjects(principal: Principal = Depends(get_current_principal)):
    return SUBJECTS


@router.get("/api/v1/clients/{client_id}/academic-records", response_model=List[AcademicRecord])
async def list_academic_records(
    client_id: str,
    principal: Principal = Depends(require_access("academic_records", "view")),
):
    return await get_academic_records_by_client_id(client_id)


@router.post(
    "/api/v1/clients/{client_id}/academic-records",
    response_model=AcademicRecord,
    status_code=201,
)
async def create_academic_record(
    client_id: str,
    request: AcademicRecordCreate,
    principal: Principal = Depends(require_access("academic_records", "create")),
):
    """Record an assessment; the grade is computed from the score"""
    if await get_client_by_id(client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")
    if get_subject(request.subject_id) is None:
        raise HTTPException(status_code=400, detail="Unknown subject")

    record = await add_academic_record(client_id, request)
    if record is None:
        raise HTTPException(status_code=500, detail="Failed to add academic record")
    return record
