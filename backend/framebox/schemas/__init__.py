"""
Pydantic Schemas for API Validation
"""
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator, model_validator
from typing import List, Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from uuid import UUID


# ==================== ENUMS ====================

class TransactionTypeEnum(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class AppointmentStatusEnum(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ==================== SHARED ====================

class FormModel(BaseModel):
    """Base for request bodies coming from HTML forms: blank strings mean 'not set'"""

    @model_validator(mode="before")
    @classmethod
    def blank_strings_to_none(cls, data):
        if isinstance(data, dict):
            return {
                key: (None if isinstance(value, str) and not value.strip() else value)
                for key, value in data.items()
            }
        return data


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are compared in the server's local calendar"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class MessageResponse(BaseModel):
    message: str


# ==================== AUTH SCHEMAS ====================

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    email: str
    authenticated: bool = True
    expires_at: Optional[datetime] = None


# ==================== CATEGORY SCHEMAS ====================

class CategoryBase(FormModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: TransactionTypeEnum
    color: Optional[str] = Field(default="#8B5CF6", pattern=r"^#[0-9A-Fa-f]{6}$")
    description: Optional[str] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(FormModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[TransactionTypeEnum] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    description: Optional[str] = None


class CategoryResponse(CategoryBase):
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategorySummary(BaseModel):
    id: UUID
    name: str
    color: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ==================== CLIENT SCHEMAS ====================

class ClientBase(FormModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(FormModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None


class ClientResponse(ClientBase):
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClientSummary(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


# ==================== SERVICE SCHEMAS ====================

class ServiceBase(FormModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    base_price: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)
    duration_hours: int = Field(default=1, ge=1)


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(FormModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    base_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    duration_hours: Optional[int] = Field(None, ge=1)


class ServiceResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    base_price: Decimal = Decimal("0.00")
    duration_hours: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("base_price", mode="before")
    @classmethod
    def missing_price_is_zero(cls, value):
        return Decimal("0.00") if value is None else value

    @field_validator("duration_hours", mode="before")
    @classmethod
    def missing_duration_is_one(cls, value):
        return 1 if value is None else value


class ServiceSummary(BaseModel):
    id: UUID
    name: str
    base_price: Optional[Decimal] = None
    duration_hours: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


# ==================== TRANSACTION SCHEMAS ====================

class TransactionBase(FormModel):
    type: TransactionTypeEnum
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    description: str = Field(..., min_length=1)
    category_id: Optional[UUID] = None
    client_id: Optional[UUID] = None
    transaction_date: date = Field(default_factory=date.today)


class TransactionCreate(TransactionBase):
    pass


class TransactionUpdate(FormModel):
    type: Optional[TransactionTypeEnum] = None
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1)
    category_id: Optional[UUID] = None
    client_id: Optional[UUID] = None
    transaction_date: Optional[date] = None


class TransactionResponse(BaseModel):
    id: UUID
    type: TransactionTypeEnum
    amount: Decimal
    description: str
    category_id: Optional[UUID] = None
    client_id: Optional[UUID] = None
    transaction_date: date
    category: Optional[CategorySummary] = None
    client: Optional[ClientSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionSummary(BaseModel):
    total_income: Decimal = Decimal("0.00")
    total_expense: Decimal = Decimal("0.00")
    balance: Decimal = Decimal("0.00")
    count: int = 0


# ==================== APPOINTMENT SCHEMAS ====================

class LineItemCreate(BaseModel):
    service_id: UUID
    quantity: int = Field(default=1, ge=1)
    # None means "use the service's base price"
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)


class LineItemResponse(BaseModel):
    id: UUID
    service_id: Optional[UUID] = None
    price: Decimal = Decimal("0.00")
    quantity: int = 1
    total: Decimal = Decimal("0.00")
    service: Optional[ServiceSummary] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("price", "total", mode="before")
    @classmethod
    def missing_amount_is_zero(cls, value):
        return Decimal("0.00") if value is None else value

    @field_validator("quantity", mode="before")
    @classmethod
    def missing_quantity_is_one(cls, value):
        return 1 if value is None else value


class AppointmentBase(FormModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    client_id: Optional[UUID] = None
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    status: AppointmentStatusEnum = AppointmentStatusEnum.SCHEDULED

    @field_validator("start_date", "end_date")
    @classmethod
    def local_time(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class AppointmentSave(AppointmentBase):
    """Whole appointment form: header fields plus the full line-item list"""
    services: List[LineItemCreate] = []


class AppointmentResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    client_id: Optional[UUID] = None
    start_date: datetime
    end_date: datetime
    location: Optional[str] = None
    status: AppointmentStatusEnum
    client: Optional[ClientSummary] = None
    services: List[LineItemResponse] = []
    total_value: Decimal = Decimal("0.00")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AppointmentSaveResponse(BaseModel):
    appointment: AppointmentResponse
    income_transaction_id: Optional[UUID] = None


# ==================== DASHBOARD SCHEMAS ====================

class DashboardStats(BaseModel):
    total_clients: int = 0
    total_services: int = 0
    monthly_income: Decimal = Decimal("0.00")
    monthly_expense: Decimal = Decimal("0.00")
    yearly_income: Decimal = Decimal("0.00")
    upcoming_appointments: int = 0
    monthly_balance: Decimal = Decimal("0.00")
    reference_time: datetime
