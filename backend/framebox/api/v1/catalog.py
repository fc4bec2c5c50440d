"""
Service Catalog API Routes
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from framebox.core.config import settings
from framebox.core.database import get_db, commit_or_conflict
from framebox.core.security import get_current_session
from framebox.schemas import ServiceCreate, ServiceUpdate, ServiceResponse, MessageResponse
from framebox.services.catalog_service import ServiceCatalogService

router = APIRouter(
    prefix="/services",
    tags=["Services"],
    dependencies=[Depends(get_current_session)]
)


@router.get("", response_model=List[ServiceResponse])
async def list_services(
    search: Optional[str] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """List services. ``search`` matches name or description."""
    return ServiceCatalogService(db).get_all(search, max(skip, 0), settings.page_size(limit))


@router.post("", response_model=ServiceResponse)
async def create_service(
    service_data: ServiceCreate,
    db: Session = Depends(get_db)
):
    """Create a new service"""
    service = ServiceCatalogService(db).create(service_data)
    commit_or_conflict(db, "Service could not be saved")
    return service


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: UUID, db: Session = Depends(get_db)):
    service = ServiceCatalogService(db).get_by_id(service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: UUID,
    service_data: ServiceUpdate,
    db: Session = Depends(get_db)
):
    """Update service. Prices already copied into appointments are not touched."""
    service = ServiceCatalogService(db).update(service_id, service_data)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    commit_or_conflict(db, "Service could not be saved")
    return service


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(service_id: UUID, db: Session = Depends(get_db)):
    """Delete service"""
    if not ServiceCatalogService(db).delete(service_id):
        raise HTTPException(status_code=404, detail="Service not found")
    commit_or_conflict(db, "Service is used by appointments and cannot be deleted")
    return {"message": "Service deleted successfully"}
