"""
Clients - Utility Functions

Admission numbers and conversion between stored rows and Client objects.
"""

from typing import Iterable, List, Optional

from mwangaza.core.config import settings
from mwangaza.clients.schemas import Client, ClientCreate, Parent


def format_admission_number(year: int, sequence: int, prefix: Optional[str] = None) -> str:
    """Format e.g. MWZ2024007"""
    prefix = settings.ADMISSION_PREFIX if prefix is None else prefix
    return f"{prefix}{year}{sequence:03d}"


def admission_sequence(number: str, year: int, prefix: Optional[str] = None) -> int:
    """Trailing counter of an admission number, 0 if it is not from that year"""
    prefix = settings.ADMISSION_PREFIX if prefix is None else prefix
    year_prefix = f"{prefix}{year}"
    if not number or not number.startswith(year_prefix):
        return 0
    try:
        return int(number[len(year_prefix):])
    except ValueError:
        return 0


def next_admission_number(existing: Iterable[str], year: int, prefix: Optional[str] = None) -> str:
    """Next admission number for the year, from a scan of existing numbers

    Numbers from other years are ignored. The highest number of the year
    (compared as strings) gives the counter to increment.
    """
    prefix = settings.ADMISSION_PREFIX if prefix is None else prefix
    year_prefix = f"{prefix}{year}"
    same_year = [number for number in existing if number and number.startswith(year_prefix)]
    if not same_year:
        return format_admission_number(year, 1, prefix)
    last = max(same_year)
    return format_admission_number(year, admission_sequence(last, year, prefix) + 1, prefix)


def _pick(row: dict, camel: str, snake: str, default=None):
    # Current rows are camelCase, legacy rows snake_case
    if camel in row:
        return row[camel]
    return row.get(snake, default)


def row_to_parent(row: dict) -> Parent:
    return Parent(
        id=row.get("id"),
        name=row.get("name", ""),
        contact=row.get("contact", ""),
        location=row.get("location", ""),
        relationship=row.get("relationship", "Guardian"),
    )


def row_to_client(row: dict, parent_rows: List[dict]) -> Client:
    return Client(
        id=row["id"],
        admission_number=_pick(row, "admissionNumber", "admission_number"),
        first_name=_pick(row, "firstName", "first_name"),
        last_name=_pick(row, "lastName", "last_name"),
        date_of_birth=_pick(row, "dateOfBirth", "date_of_birth"),
        gender=row.get("gender"),
        original_home=_pick(row, "originalHome", "original_home", ""),
        street=row.get("street", ""),
        admission_date=_pick(row, "admissionDate", "admission_date"),
        intake=row.get("intake"),
        notes=row.get("notes"),
        status=row.get("status", "active"),
        aftercare_details=_pick(row, "aftercareDetails", "aftercare_details"),
        parents=[row_to_parent(parent) for parent in parent_rows],
    )


def client_to_row(client_id: str, client: ClientCreate) -> dict:
    row = client.model_dump(mode="json", by_alias=True, exclude={"parents"})
    row["id"] = client_id
    return row


def parent_to_row(parent_id: str, client_id: str, parent: Parent) -> dict:
    row = parent.model_dump(mode="json", by_alias=True)
    row["id"] = parent_id
    row["clientId"] = client_id
    return row


def matches_search(client: Client, search: str) -> bool:
    """Case-insensitive match on name, admission number or original home"""
    needle = search.strip().lower()
    if not needle:
        return True
    haystack = (
        client.first_name,
        client.last_name,
        client.admission_number,
        client.original_home,
    )
    return any(needle in (value or "").lower() for value in haystack)
