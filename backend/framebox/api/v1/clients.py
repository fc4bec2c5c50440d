"""
Client API Routes
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from framebox.core.config import settings
from framebox.core.database import get_db, commit_or_conflict
from framebox.core.security import get_current_session
from framebox.schemas import ClientCreate, ClientUpdate, ClientResponse, MessageResponse
from framebox.services.client_service import ClientService

router = APIRouter(
    prefix="/clients",
    tags=["Clients"],
    dependencies=[Depends(get_current_session)]
)


@router.get("", response_model=List[ClientResponse])
async def list_clients(
    search: Optional[str] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """List clients, newest first. ``search`` matches name, email or phone."""
    return ClientService(db).get_all(search, max(skip, 0), settings.page_size(limit))


@router.post("", response_model=ClientResponse)
async def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db)
):
    """Create a new client"""
    client = ClientService(db).create(client_data)
    commit_or_conflict(db, "Client could not be saved")
    return client


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: UUID, db: Session = Depends(get_db)):
    client = ClientService(db).get_by_id(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    client_data: ClientUpdate,
    db: Session = Depends(get_db)
):
    """Update client"""
    client = ClientService(db).update(client_id, client_data)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    commit_or_conflict(db, "Client could not be saved")
    return client


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(client_id: UUID, db: Session = Depends(get_db)):
    """Delete client"""
    if not ClientService(db).delete(client_id):
        raise HTTPException(status_code=404, detail="Client not found")
    commit_or_conflict(db, "Client has transactions or appointments and cannot be deleted")
    return {"message": "Client deleted successfully"}
