"""
Clients - API Routes

PROTECTED ENDPOINTS - JWT authentication required
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from mwangaza.auth.routes import require_access
from mwangaza.auth.schemas import Principal
from mwangaza.clients.schemas import (
    Client, ClientRegistration, NotesUpdateRequest, StatusUpdateRequest
)
from mwangaza.clients.service import (
    get_client_by_id, get_clients, register_client, search_clients,
    update_client_notes, update_client_status
)

router = APIRouter()


@router.get("/api/v1/clients", response_model=List[Client])
async def list_clients(
    q: Optional[str] = Query(None, description="Search name, admission number or original home"),
    principal: Principal = Depends(require_access("clients", "view")),
):
    if q:
        return await search_clients(q)
    return await get_clients()


@router.post("/api/v1/clients", response_model=Client, status_code=201)
async def create_client(
    registration: ClientRegistration,
    principal: Principal = Depends(require_access("clients", "create")),
):
    """Register a client; the admission number is assigned automatically"""
    client = await register_client(registration)
    if client is None:
        raise HTTPException(status_code=500, detail="Failed to register client")
    return client


@router.get("/api/v1/clients/{client_id}", response_model=Client)
async def read_client(
    client_id: str,
    principal: Principal = Depends(require_access("clients", "view")),
):
    client = await get_client_by_id(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.patch("/api/v1/clients/{client_id}/status", response_model=Client)
async def change_client_status(
    client_id: str,
    request: StatusUpdateRequest,
    principal: Principal = Depends(require_access("client_status", "update")),
):
    """Update reintegration status and aftercare placement"""
    client = await update_client_status(client_id, request.status, request.aftercare_details)
    if client is None:
        raise HTTPException(status_code=404, detail="Failed to update client status")
    return client


@router.patch("/api/v1/clients/{client_id}/notes", response_model=Client)
async def change_client_notes(
    client_id: str,
    request: NotesUpdateRequest,
    principal: Principal = Depends(require_access("clients", "update")),
):
    client = await update_client_notes(client_id, request.notes)
    if client is None:
        raise HTTPException(status_code=404, detail="Failed to update client notes")
    return client
