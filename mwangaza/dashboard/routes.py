"""
Dashboard - API Routes

PROTECTED ENDPOINTS - JWT authentication required
Summary figures for the dashboard; department statistics are role gated
"""

from collections import Counter

from fastapi import APIRouter, Depends

from mwangaza.auth.permissions import DEPARTMENTS, can_access
from mwangaza.auth.routes import get_current_principal
from mwangaza.auth.schemas import Principal
from mwangaza.clients.schemas import CLIENT_STATUSES
from mwangaza.clients.service import get_clients
from mwangaza.visits.service import get_home_visits
from mwangaza.academics.service import get_academic_records
from mwangaza.academics.utils import average_score

router = APIRouter()


@router.get("/api/v1/dashboard/summary")
async def dashboard_summary(principal: Principal = Depends(get_current_principal)):
    """Dashboard summary statistics"""
    clients = await get_clients()
    visits = await get_home_visits()
    records = await get_academic_records()

    status_counts = Counter(client.status for client in clients)
    latest_admission = max((client.admission_date for client in clients), default=None)

    summary = {
        "total_clients": len(clients),
        "clients_by_status": {status: status_counts.get(status, 0) for status in CLIENT_STATUSES},
        "total_home_visits": len(visits),
        "total_academic_records": len(records),
        "average_score": average_score(record.score for record in records),
        "latest_admission_date": latest_admission.isoformat() if latest_admission else None,
        "department_count": len(DEPARTMENTS),
        "departments": None,
    }

    if can_access(principal, "department_stats", "view"):
        summary["departments"] = [department.model_dump() for department in DEPARTMENTS]

    return summary
