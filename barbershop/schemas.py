# barbershop/schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from datetime import datetime, date
from typing import Optional

# Bookable start times shown by the booking page
TIME_SLOTS = (
    "09:00", "10:00", "11:00", "12:00", "13:00", "14:00",
    "15:00", "16:00", "17:00", "18:00", "19:00",
)


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no-show"


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    open_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: UserRole
    no_show_count: int = 0
    is_blocked: bool = False


class BarberPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class BarberLogin(BaseModel):
    name: str
    password: str


class BarberSession(BaseModel):
    id: int
    name: str


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    price: Optional[str] = None
    duration: Optional[int] = None
    is_featured: bool = False


class AppointmentCreate(BaseModel):
    barber_id: int
    service_id: int
    appointment_date: date
    appointment_time: str
    client_name: str = Field(min_length=1, max_length=255)
    client_phone: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None

    @field_validator("appointment_time")
    @classmethod
    def time_in_slots(cls, value: str) -> str:
        if value not in TIME_SLOTS:
            raise ValueError(f"appointment_time must be one of {', '.join(TIME_SLOTS)}")
        return value


class NoShowCreate(BaseModel):
    reason: Optional[str] = None


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    barber_id: int
    service_id: int
    appointment_date: datetime
    appointment_time: str
    status: AppointmentStatus
    client_name: str
    client_phone: Optional[str] = None
    notes: Optional[str] = None
    no_show_reason: Optional[str] = None
    created_at: datetime


class AppointmentWithService(AppointmentPublic):
    service: Optional[ServicePublic] = None


class AppointmentWithDetails(AppointmentWithService):
    barber: Optional[BarberPublic] = None


class ActionResult(BaseModel):
    success: bool = True
    message: Optional[str] = None


class NoShowResult(ActionResult):
    no_show_count: int
    is_blocked: bool
    email_sent: bool

