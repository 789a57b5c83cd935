# barbershop/crud.py
#
# Table reads and writes. Every function takes the request session; a None
# session means no database is configured, so reads return empty results
# and writes raise 503.

import logging
from datetime import datetime, date, time, timedelta
from typing import List, Optional

from fastapi import HTTPException
from sqlmodel import Session, select

from .config import OWNER_OPEN_ID
from .models import User, Barber, Service, Appointment, utcnow
from .schemas import AppointmentStatus

logger = logging.getLogger(__name__)


def _require_store(session: Optional[Session]) -> Session:
    if session is None:
        logger.error("Write attempted without a database")
        raise HTTPException(status_code=503, detail="Database not available")
    return session


def day_bounds(day: date):
    start_of_day = datetime.combine(day, time.min)
    end_of_day = start_of_day + timedelta(days=1) - timedelta(microseconds=1)
    return start_of_day, end_of_day


# User queries
def upsert_user(
    session: Optional[Session],
    open_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    login_method: Optional[str] = None,
    role: Optional[str] = None,
) -> User:
    if not open_id:
        raise ValueError("User open_id is required for upsert")
    session = _require_store(session)

    user = get_user_by_open_id(session, open_id)
    if user is None:
        user = User(open_id=open_id)

    # None means "leave as is"
    if name is not None:
        user.name = name
    if email is not None:
        user.email = email
    if login_method is not None:
        user.login_method = login_method
    if role is not None:
        user.role = role
    elif OWNER_OPEN_ID and open_id == OWNER_OPEN_ID:
        user.role = "admin"

    now = utcnow()
    user.last_signed_in = now
    user.updated_at = now

    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def get_user_by_open_id(session: Optional[Session], open_id: str) -> Optional[User]:
    if session is None:
        return None
    return session.exec(select(User).where(User.open_id == open_id)).first()


def get_user_by_id(session: Optional[Session], user_id: int) -> Optional[User]:
    if session is None:
        return None
    return session.get(User, user_id)


def increment_user_no_show_count(session: Optional[Session], user_id: int) -> Optional[User]:
    """Count one more no-show; the second one blocks the user from booking."""
    session = _require_store(session)
    user = session.get(User, user_id)
    if user is None:
        return None

    user.no_show_count = (user.no_show_count or 0) + 1
    user.is_blocked = user.no_show_count >= 2
    user.updated_at = utcnow()
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


# Barber queries
def get_active_barbers(session: Optional[Session]) -> List[Barber]:
    if session is None:
        return []
    return list(session.exec(select(Barber).where(Barber.is_active == True).order_by(Barber.id)).all())  # noqa: E712


def get_barber_by_id(session: Optional[Session], barber_id: int) -> Optional[Barber]:
    if session is None:
        return None
    return session.get(Barber, barber_id)


def get_barber_by_name(session: Optional[Session], name: str) -> Optional[Barber]:
    if session is None:
        return None
    return session.exec(select(Barber).where(Barber.name == name)).first()


# Service queries
def get_all_services(session: Optional[Session]) -> List[Service]:
    if session is None:
        return []
    return list(session.exec(select(Service).order_by(Service.id)).all())


def get_service_by_id(session: Optional[Session], service_id: int) -> Optional[Service]:
    if session is None:
        return None
    return session.get(Service, service_id)


# Appointment queries
def insert_appointment(session: Optional[Session], appointment: Appointment) -> Appointment:
    """Insert and commit. IntegrityError propagates to the caller after rollback."""
    session = _require_store(session)
    session.add(appointment)
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(appointment)  # fills appointment.id
    return appointment


def get_appointment_by_id(session: Optional[Session], appointment_id: int) -> Optional[Appointment]:
    if session is None:
        return None
    return session.get(Appointment, appointment_id)


def get_appointments_by_user_id(session: Optional[Session], user_id: int) -> List[Appointment]:
    if session is None:
        return []
    stmt = (
        select(Appointment)
        .where(Appointment.user_id == user_id)
        .order_by(Appointment.appointment_date, Appointment.appointment_time)
    )
    return list(session.exec(stmt).all())


def get_appointments_by_barber_id_and_date(
    session: Optional[Session], barber_id: int, day: date
) -> List[Appointment]:
    if session is None:
        return []
    start_of_day, end_of_day = day_bounds(day)
    stmt = (
        select(Appointment)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.appointment_date >= start_of_day)
        .where(Appointment.appointment_date <= end_of_day)
        .where(Appointment.status != AppointmentStatus.cancelled.value)
        .order_by(Appointment.appointment_time)
    )
    return list(session.exec(stmt).all())


def get_upcoming_appointments_by_barber_id(
    session: Optional[Session], barber_id: int, now: Optional[datetime] = None
) -> List[Appointment]:
    if session is None:
        return []
    now = now or utcnow()
    stmt = (
        select(Appointment)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.appointment_date >= now)
        .where(Appointment.status != AppointmentStatus.cancelled.value)
        .order_by(Appointment.appointment_date, Appointment.appointment_time)
    )
    return list(session.exec(stmt).all())


def check_appointment_conflict(
    session: Optional[Session], barber_id: int, appointment_date: datetime, appointment_time: str
) -> bool:
    """True when the barber already has a live appointment at that day and time."""
    if session is None:
        return False

    # Only the calendar day matters, the stored time of day is normalised
    start_of_day, end_of_day = day_bounds(appointment_date.date())
    existing = session.exec(
        select(Appointment.id)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.appointment_date >= start_of_day)
        .where(Appointment.appointment_date <= end_of_day)
        .where(Appointment.appointment_time == appointment_time)
        .where(Appointment.status != AppointmentStatus.cancelled.value)
    ).first()
    return existing is not None


def set_appointment_status(
    session: Optional[Session], appointment: Appointment, status: AppointmentStatus, **fields
) -> Appointment:
    session = _require_store(session)
    appointment.status = status.value
    for key, value in fields.items():
        setattr(appointment, key, value)
    appointment.updated_at = utcnow()
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    return appointment
