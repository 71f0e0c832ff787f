"""
Clients - Service Functions

Reads go through the mock query engine; writes go through the table
repositories. Every function catches failures at its boundary, logs them and
returns an empty list or None.
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import uuid4

from mwangaza.db.query import DB_KEYS, query
from mwangaza.db.repository import Repository
from mwangaza.core.exceptions import RecordNotFoundError
from mwangaza.clients.schemas import (
    CLIENT_STATUSES, AftercareProgramDetails, Client, ClientCreate, ClientRegistration
)
from mwangaza.clients.sequence import AdmissionSequence
from mwangaza.clients.utils import (
    client_to_row, matches_search, parent_to_row, row_to_client
)

logger = logging.getLogger(__name__)

clients_table = Repository(DB_KEYS["clients"])
parents_table = Repository(DB_KEYS["parents"])
admission_sequence = AdmissionSequence()


async def _load_client(row: dict) -> Client:
    parents = await query("SELECT * FROM parents WHERE client_id = ?", [row["id"]])
    return row_to_client(row, parents)


async def get_clients() -> List[Client]:
    """All clients, each with its parents"""
    try:
        rows = await query("SELECT * FROM clients")
        return [await _load_client(row) for row in rows]
    except Exception:
        logger.exception("Error fetching clients")
        return []


async def get_client_by_id(client_id: str) -> Optional[Client]:
    try:
        rows = await query("SELECT * FROM clients WHERE id = ?", [client_id])
        if not rows:
            return None
        return await _load_client(rows[0])
    except Exception:
        logger.exception("Error fetching client %s", client_id)
        return None


async def search_clients(search: str) -> List[Client]:
    clients = await get_clients()
    return [client for client in clients if matches_search(client, search)]


async def add_client(client: ClientCreate) -> Optional[Client]:
    """Store a client and its parents, then read it back"""
    client_id = str(uuid4())
    try:
        clients_table.insert(client_to_row(client_id, client))
        # No transaction spans both writes: a failure here leaves a client without parents
        if client.parents:
            parents_table.insert_many([
                parent_to_row(parent.id or str(uuid4()), client_id, parent)
                for parent in client.parents
            ])
    except Exception:
        logger.exception("Error adding client %s", client.admission_number)
        return None

    return await get_client_by_id(client_id)


async def register_client(registration: ClientRegistration, today: Optional[date] = None) -> Optional[Client]:
    """Assign the next admission number and add the client"""
    today = today or date.today()
    admission_date = registration.admission_date or today
    try:
        rows = await query("SELECT * FROM clients")
        existing = [row.get("admissionNumber") or row.get("admission_number") for row in rows]
        admission_number = admission_sequence.allocate(admission_date.year, existing)
    except Exception:
        logger.exception("Error allocating admission number")
        return None

    fields = registration.model_dump(exclude={"admission_date"})
    if not fields.get("intake"):
        fields["intake"] = admission_date.strftime("%Y-%m")
    client = ClientCreate(
        admission_number=admission_number,
        admission_date=admission_date,
        **fields,
    )
    return await add_client(client)


async def update_client_status(
    client_id: str,
    status: str,
    aftercare_details: Optional[AftercareProgramDetails] = None,
) -> Optional[Client]:
    """Set status and aftercare details (cleared when omitted)"""
    if status not in CLIENT_STATUSES:
        logger.warning("Rejected unknown client status %r", status)
        return None

    details = aftercare_details.model_dump(mode="json", by_alias=True) if aftercare_details else None
    try:
        clients_table.update(client_id, {"status": status, "aftercareDetails": details})
    except RecordNotFoundError:
        logger.warning("Client %s not found for status update", client_id)
        return None
    except Exception:
        logger.exception("Error updating status of client %s", client_id)
        return None

    return await get_client_by_id(client_id)


async def update_client_notes(client_id: str, notes: str) -> Optional[Client]:
    try:
        clients_table.update(client_id, {"notes": notes})
    except RecordNotFoundError:
        logger.warning("Client %s not found for notes update", client_id)
        return None
    except Exception:
        logger.exception("Error updating notes of client %s", client_id)
        return None

    return await get_client_by_id(client_id)
