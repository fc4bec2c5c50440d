"""
Scheduling Service - Appointments and their service line items
"""
import logging
from typing import Optional, List, Tuple
from uuid import UUID
from decimal import Decimal
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from framebox.models import (
    Appointment, AppointmentService as LineItem, AppointmentStatus,
    Client, Transaction, TransactionType
)
from framebox.schemas import AppointmentSave
from framebox.services.catalog_service import ServiceCatalogService

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

HEADER_FIELDS = ("title", "description", "client_id", "start_date", "end_date", "location")


class SchedulingService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, appointment_id: UUID) -> Optional[Appointment]:
        return self.db.query(Appointment).options(
            selectinload(Appointment.services)
        ).filter(Appointment.id == appointment_id).first()

    def get_all(self, status: str = None, client_id: UUID = None,
                skip: int = 0, limit: int = None) -> List[Appointment]:
        """Soonest first"""
        query = self.db.query(Appointment).options(selectinload(Appointment.services))
        if status:
            query = query.filter(Appointment.status == status)
        if client_id:
            query = query.filter(Appointment.client_id == client_id)
        query = query.order_by(Appointment.start_date.asc()).offset(skip)
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def calculate_total(items) -> Decimal:
        """Sum of price x quantity over the line items"""
        total = sum(
            (Decimal(item.price or 0) * (item.quantity or 0) for item in items),
            Decimal("0")
        )
        return total.quantize(TWO_PLACES)

    def save(self, appointment_data: AppointmentSave,
             appointment_id: UUID = None) -> Optional[Tuple[Appointment, Optional[Transaction]]]:
        """
        Save the whole appointment form: header row, then the full line-item
        list replacing whatever was stored before. Nothing is committed here,
        so the caller commits the header and items together or not at all.

        Returns None when editing an appointment that does not exist.
        """
        client = None
        if appointment_data.client_id:
            client = self.db.query(Client).filter(Client.id == appointment_data.client_id).first()
            if not client:
                raise ValueError("Client not found")

        catalog = ServiceCatalogService(self.db).get_by_ids(
            item.service_id for item in appointment_data.services
        )
        for item in appointment_data.services:
            if item.service_id not in catalog:
                raise ValueError(f"Service {item.service_id} not found")

        if appointment_id:
            appointment = self.get_by_id(appointment_id)
            if not appointment:
                return None
            # drop the old line items, delete-orphan removes the rows
            appointment.services.clear()
            self.db.flush()
        else:
            appointment = Appointment()
            self.db.add(appointment)

        for field in HEADER_FIELDS:
            setattr(appointment, field, getattr(appointment_data, field))
        appointment.status = appointment_data.status.value

        self._add_line_items(appointment, appointment_data, catalog)
        self.db.flush()

        income = None
        if appointment.status == AppointmentStatus.COMPLETED.value and appointment.services:
            income = self._record_income(appointment, client)

        return appointment, income

    def _add_line_items(self, appointment: Appointment, appointment_data: AppointmentSave, catalog: dict):
        for item_data in appointment_data.services:
            service = catalog[item_data.service_id]
            price = item_data.price
            if price is None:
                # copy-on-insert snapshot of the catalog price
                price = service.base_price if service.base_price is not None else Decimal("0.00")
            appointment.services.append(LineItem(
                service_id=service.id,
                price=price,
                quantity=item_data.quantity
            ))

    def _record_income(self, appointment: Appointment, client: Optional[Client]) -> Optional[Transaction]:
        """
        Book the appointment's total as income. Runs in a savepoint: if the
        insert is rejected the appointment save still goes through.
        """
        description = f"Receita do agendamento: {appointment.title}"
        if client:
            description += f" - {client.name}"

        try:
            with self.db.begin_nested():
                transaction = Transaction(
                    type=TransactionType.INCOME.value,
                    amount=self.calculate_total(appointment.services),
                    description=description,
                    client_id=appointment.client_id,
                    transaction_date=appointment.start_date.date()
                )
                self.db.add(transaction)
            return transaction
        except SQLAlchemyError:
            logger.exception("Could not record income for appointment %s", appointment.id)
            return None

    def delete(self, appointment_id: UUID) -> bool:
        """Delete an appointment together with its line items"""
        appointment = self.get_by_id(appointment_id)
        if not appointment:
            return False

        self.db.delete(appointment)
        return True
