"""
SQLAlchemy Models for FrameBOX
"""
import enum
import uuid

from sqlalchemy import (
    Column, Integer, Text, Date, DateTime, Numeric, Uuid,
    ForeignKey, Index, CheckConstraint, func
)
from sqlalchemy.orm import relationship

from framebox.core.database import Base


# ==================== ENUMS ====================

class TransactionType(enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


class AppointmentStatus(enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _values(enum_cls) -> str:
    return ", ".join(f"'{member.value}'" for member in enum_cls)


# ==================== CATALOG ====================

class Category(Base):
    """Income or expense bucket for transactions"""
    __tablename__ = 'categories'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    color = Column(Text, default="#8B5CF6")
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(f"type IN ({_values(TransactionType)})", name='ck_categories_type'),
    )


class Client(Base):
    """Customer of the studio"""
    __tablename__ = 'clients'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Service(Base):
    """Sellable service with a default price"""
    __tablename__ = 'services'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(10, 2), nullable=True)
    duration_hours = Column(Integer, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


# ==================== CASH FLOW ====================

class Transaction(Base):
    """Income or expense entry"""
    __tablename__ = 'transactions'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    type = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(Text, nullable=False)
    # No ON DELETE rule: deleting a referenced category or client is rejected
    category_id = Column(Uuid, ForeignKey('categories.id'), nullable=True)
    client_id = Column(Uuid, ForeignKey('clients.id'), nullable=True)
    transaction_date = Column(Date, nullable=False, server_default=func.current_date())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships (many-to-one only, parents never touch children on delete)
    category = relationship("Category", lazy="joined")
    client = relationship("Client", lazy="joined")

    __table_args__ = (
        CheckConstraint(f"type IN ({_values(TransactionType)})", name='ck_transactions_type'),
        CheckConstraint("amount > 0", name='ck_transactions_amount_positive'),
        Index('ix_transactions_transaction_date', 'transaction_date'),
    )


# ==================== SCHEDULING ====================

class Appointment(Base):
    """Scheduled session with a client"""
    __tablename__ = 'appointments'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    client_id = Column(Uuid, ForeignKey('clients.id'), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    location = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default=AppointmentStatus.SCHEDULED.value,
                    server_default=AppointmentStatus.SCHEDULED.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("Client", lazy="joined")
    services = relationship(
        "AppointmentService",
        back_populates="appointment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AppointmentService.created_at"
    )

    __table_args__ = (
        CheckConstraint(f"status IN ({_values(AppointmentStatus)})", name='ck_appointments_status'),
        Index('ix_appointments_start_date', 'start_date'),
    )

    @property
    def total_value(self):
        return sum((item.total for item in self.services), 0)


class AppointmentService(Base):
    """Line item: one service sold within an appointment"""
    __tablename__ = 'appointment_services'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    appointment_id = Column(Uuid, ForeignKey('appointments.id', ondelete='CASCADE'), nullable=True)
    service_id = Column(Uuid, ForeignKey('services.id'), nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    quantity = Column(Integer, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    appointment = relationship("Appointment", back_populates="services")
    service = relationship("Service", lazy="joined")

    @property
    def total(self):
        return (self.price or 0) * (self.quantity or 0)
