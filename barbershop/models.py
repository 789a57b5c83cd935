# barbershop/models.py

from typing import Optional
from datetime import datetime, timezone

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    open_id: str = Field(max_length=64, index=True, unique=True)
    name: Optional[str] = None
    email: Optional[str] = Field(default=None, max_length=320)
    login_method: Optional[str] = Field(default=None, max_length=64)
    role: str = "user"  # user or admin
    no_show_count: int = 0
    is_blocked: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    last_signed_in: datetime = Field(default_factory=utcnow)


class Barber(SQLModel, table=True):
    __tablename__ = "barbers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, index=True)
    description: Optional[str] = None
    image_url: Optional[str] = None
    password: str  # passlib hash
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Service(SQLModel, table=True):
    __tablename__ = "services"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = None
    price: Optional[str] = Field(default=None, max_length=50)  # display string, e.g. "R$ 40,00"
    duration: Optional[int] = None  # minutes
    is_featured: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    # One live appointment per barber slot; cancelled rows free the slot
    __table_args__ = (
        Index(
            "uq_barber_slot_active",
            "barber_id",
            "appointment_date",
            "appointment_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)
    barber_id: int = Field(foreign_key="barbers.id", index=True)
    service_id: int = Field(foreign_key="services.id")
    appointment_date: datetime  # calendar day at 12:00 UTC
    appointment_time: str = Field(max_length=10)  # "HH:MM"
    status: str = "pending"
    client_name: str = Field(max_length=255)
    client_phone: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None
    no_show_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
