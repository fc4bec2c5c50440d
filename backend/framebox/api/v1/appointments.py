"""
Schedule API Routes - Appointments with their service line items
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from framebox.core.config import settings
from framebox.core.database import get_db, commit_or_conflict
from framebox.core.security import get_current_session
from framebox.schemas import (
    AppointmentSave, AppointmentResponse, AppointmentSaveResponse,
    AppointmentStatusEnum, MessageResponse
)
from framebox.services.scheduling_service import SchedulingService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/appointments",
    tags=["Schedule"],
    dependencies=[Depends(get_current_session)]
)


def _save(db: Session, appointment_data: AppointmentSave, appointment_id: UUID = None) -> dict:
    """Header, line items and the completion income go out in one commit"""
    try:
        result = SchedulingService(db).save(appointment_data, appointment_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Appointment not found")

    appointment, income = result
    income_id = income.id if income is not None else None
    commit_or_conflict(db, "Appointment could not be saved")

    if income_id:
        logger.info("Appointment %s completed, income %s recorded", appointment.id, income_id)
    return {"appointment": appointment, "income_transaction_id": income_id}


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
    status: Optional[AppointmentStatusEnum] = None,
    client_id: Optional[UUID] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """List appointments, soonest first"""
    return SchedulingService(db).get_all(
        status.value if status else None,
        client_id,
        max(skip, 0),
        settings.page_size(limit)
    )


@router.post("", response_model=AppointmentSaveResponse)
async def create_appointment(
    appointment_data: AppointmentSave,
    db: Session = Depends(get_db)
):
    """Create an appointment with its line items"""
    return _save(db, appointment_data)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: UUID, db: Session = Depends(get_db)):
    appointment = SchedulingService(db).get_by_id(appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.put("/{appointment_id}", response_model=AppointmentSaveResponse)
async def update_appointment(
    appointment_id: UUID,
    appointment_data: AppointmentSave,
    db: Session = Depends(get_db)
):
    """Resubmit the appointment form; the line-item list is replaced as a whole"""
    return _save(db, appointment_data, appointment_id)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(appointment_id: UUID, db: Session = Depends(get_db)):
    """Delete appointment and its line items"""
    if not SchedulingService(db).delete(appointment_id):
        raise HTTPException(status_code=404, detail="Appointment not found")
    commit_or_conflict(db, "Appointment could not be deleted")
    return {"message": "Appointment deleted successfully"}
