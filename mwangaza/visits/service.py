"""
Home Visits - Service Functions

The mock engine has no ORDER BY, so lists are sorted here (newest first,
equal dates keep insertion order).
"""

import logging
from calendar import monthrange
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from mwangaza.db.query import DB_KEYS, query
from mwangaza.db.repository import Repository
from mwangaza.core.exceptions import RecordNotFoundError
from mwangaza.clients.schemas import Client
from mwangaza.visits.schemas import HomeVisit, HomeVisitCreate

logger = logging.getLogger(__name__)

home_visits_table = Repository(DB_KEYS["home_visits"])


def row_to_visit(row: dict) -> HomeVisit:
    return HomeVisit(
        id=row["id"],
        client_id=row["clientId"] if "clientId" in row else row.get("client_id"),
        date=row.get("date"),
        conducted_by=row["conductedBy"] if "conductedBy" in row else row.get("conducted_by"),
        summary=row.get("summary"),
        recommendations=row.get("recommendations"),
    )


def visit_to_row(visit: HomeVisit) -> dict:
    return visit.model_dump(mode="json", by_alias=True)


def sort_by_date_desc(visits: Iterable[HomeVisit]) -> List[HomeVisit]:
    # sorted() is stable with reverse=True, so ties stay in insertion order
    return sorted(visits, key=lambda visit: visit.date, reverse=True)


async def get_home_visits() -> List[HomeVisit]:
    try:
        rows = await query("SELECT * FROM home_visits")
        return sort_by_date_desc(row_to_visit(row) for row in rows)
    except Exception:
        logger.exception("Error fetching home visits")
        return []


async def get_home_visits_by_client_id(client_id: str) -> List[HomeVisit]:
    try:
        rows = await query("SELECT * FROM home_visits WHERE client_id = ?", [client_id])
        return sort_by_date_desc(row_to_visit(row) for row in rows)
    except Exception:
        logger.exception("Error fetching home visits for client %s", client_id)
        return []


async def add_home_visit(data: HomeVisitCreate) -> Optional[HomeVisit]:
    visit = HomeVisit(id=str(uuid4()), **data.model_dump())
    try:
        home_visits_table.insert(visit_to_row(visit))
    except Exception:
        logger.exception("Error adding home visit for client %s", data.client_id)
        return None
    return visit


async def update_home_visit(visit: HomeVisit) -> HomeVisit:
    """Replace a stored visit; raises RecordNotFoundError for an unknown id"""
    try:
        home_visits_table.replace(visit.id, visit_to_row(visit))
    except RecordNotFoundError:
        logger.warning("Home visit %s not found", visit.id)
        raise
    except Exception:
        logger.exception("Error updating home visit %s", visit.id)
        raise
    return visit


def filter_home_visits(
    visits: Iterable[HomeVisit],
    period: str = "all",
    search: Optional[str] = None,
    clients: Optional[Dict[str, Client]] = None,
    today: Optional[date] = None,
) -> List[HomeVisit]:
    """Report filter: date window plus text search

    search matches the client's full name, the summary or the author.
    """
    today = today or date.today()
    if period == "last-week":
        since = today - timedelta(days=7)
    elif period == "last-month":
        month = today.month - 1 or 12
        year = today.year if today.month > 1 else today.year - 1
        since = today.replace(year=year, month=month, day=min(today.day, monthrange(year, month)[1]))
    else:
        since = None

    needle = (search or "").strip().lower()
    clients = clients or {}
    result = []
    for visit in visits:
        if since and visit.date < since:
            continue
        if needle:
            client = clients.get(visit.client_id)
            client_name = f"{client.first_name} {client.last_name}".lower() if client else ""
            if not (
                needle in client_name
                or needle in visit.summary.lower()
                or needle in visit.conducted_by.lower()
            ):
                continue
        result.append(visit)
    return result


async def get_home_visit_by_id(visit_id: str) -> Optional[HomeVisit]:
    try:
        row = home_visits_table.get_by_id(visit_id)
        return row_to_visit(row) if row else None
    except Exception:
        logger.exception("Error fetching home visit %s", visit_id)
        return None
