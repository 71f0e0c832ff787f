"""
Home Visits - API Routes

PROTECTED ENDPOINTS - JWT authentication required
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from mwangaza.auth.permissions import can_access
from mwangaza.auth.routes import require_access
from mwangaza.auth.schemas import Principal
from mwangaza.core.exceptions import RecordNotFoundError
from mwangaza.clients.service import get_client_by_id, get_clients
from mwangaza.visits.schemas import HomeVisit, HomeVisitCreate, HomeVisitRequest, ReportPeriod
from mwangaza.visits.service import (
    add_home_visit, filter_home_visits, get_home_visits,
    get_home_visits_by_client_id, update_home_visit
)

router = APIRouter()


@router.get("/api/v1/home-visits", response_model=List[HomeVisit])
async def list_home_visits(
    period: ReportPeriod = Query("all"),
    q: Optional[str] = Query(None, description="Search client name, summary or author"),
    principal: Principal = Depends(require_access("home_visits", "view")),
):
    """Visit reports, newest first

    Filtering by period or search text is the reports view and needs its own grant.
    """
    if period == "all" and not q:
        return await get_home_visits()
    if not can_access(principal, "reports", "view"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this content."
        )
    visits = await get_home_visits()
    clients = {client.id: client for client in await get_clients()} if q else {}
    return filter_home_visits(visits, period=period, search=q, clients=clients)


@router.post("/api/v1/home-visits", response_model=HomeVisit, status_code=201)
async def create_home_visit(
    request: HomeVisitRequest,
    principal: Principal = Depends(require_access("home_visits", "create")),
):
    if await get_client_by_id(request.client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")

    visit = await add_home_visit(
        HomeVisitCreate(conducted_by=principal.name, **request.model_dump())
    )
    if visit is None:
        raise HTTPException(status_code=500, detail="Failed to add home visit")
    return visit


@router.put("/api/v1/home-visits/{visit_id}", response_model=HomeVisit)
async def replace_home_visit(
    visit_id: str,
    request: HomeVisitCreate,
    principal: Principal = Depends(require_access("home_visits", "update")),
):
    try:
        return await update_home_visit(HomeVisit(id=visit_id, **request.model_dump()))
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Home visit not found")


@router.get("/api/v1/clients/{client_id}/home-visits", response_model=List[HomeVisit])
async def list_client_home_visits(
    client_id: str,
    principal: Principal = Depends(require_access("home_visits", "view")),
):
    return await get_home_visits_by_client_id(client_id)
