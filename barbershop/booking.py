# barbershop/booking.py
#
# Appointment lifecycle: booking, listing, cancel, complete and no-show.

import logging
from datetime import datetime, date
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from . import crud
from .models import Appointment
from .notifications import send_no_show_email
from .schemas import (
    AppointmentCreate,
    AppointmentStatus,
    AppointmentWithService,
    AppointmentWithDetails,
    BarberPublic,
    ServicePublic,
)

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "This time is already booked for this barber. Please choose another time."

ALLOWED_TRANSITIONS = {
    AppointmentStatus.pending: {
        AppointmentStatus.confirmed,
        AppointmentStatus.completed,
        AppointmentStatus.cancelled,
        AppointmentStatus.no_show,
    },
    AppointmentStatus.confirmed: {
        AppointmentStatus.completed,
        AppointmentStatus.cancelled,
        AppointmentStatus.no_show,
    },
}


def normalize_appointment_date(day: date) -> datetime:
    # Noon keeps the calendar day stable under any timezone shift
    return datetime(day.year, day.month, day.day, 12, 0, 0)


def _check_transition(appointment: Appointment, target: AppointmentStatus):
    current = AppointmentStatus(appointment.status)
    if target not in ALLOWED_TRANSITIONS.get(current, set()):
        raise HTTPException(
            status_code=409,
            detail=f"Appointment is already {current.value}",
        )


def _get_or_404(session: Optional[Session], appointment_id: int) -> Appointment:
    appointment = crud.get_appointment_by_id(session, appointment_id)
    if appointment is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


def _check_barber_owns(appointment: Appointment, barber_id: int):
    if appointment.barber_id != barber_id:
        raise HTTPException(status_code=403, detail="This appointment belongs to another barber")


def create_appointment(session: Optional[Session], user_id: int, data: AppointmentCreate) -> Appointment:
    # 1) Blocked clients cannot book
    user = crud.get_user_by_id(session, user_id)
    if session is not None and user is None:
        raise HTTPException(status_code=401, detail="User not found")
    if user is not None and user.is_blocked:
        raise HTTPException(
            status_code=403,
            detail="Your account is blocked from booking after repeated no-shows",
        )

    # 2) Validate barber and service
    if session is not None:
        barber = crud.get_barber_by_id(session, data.barber_id)
        if barber is None or not barber.is_active:
            raise HTTPException(status_code=404, detail="Barber not found")
        if crud.get_service_by_id(session, data.service_id) is None:
            raise HTTPException(status_code=404, detail="Service not found")

    # 3) Reject a slot that is already taken
    appointment_date = normalize_appointment_date(data.appointment_date)
    if crud.check_appointment_conflict(session, data.barber_id, appointment_date, data.appointment_time):
        raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE)

    # 4) Create and save; the unique index settles concurrent bookings
    appointment = Appointment(
        user_id=user_id,
        barber_id=data.barber_id,
        service_id=data.service_id,
        appointment_date=appointment_date,
        appointment_time=data.appointment_time,
        status=AppointmentStatus.pending.value,
        client_name=data.client_name,
        client_phone=data.client_phone,
        notes=data.notes,
    )
    try:
        appointment = crud.insert_appointment(session, appointment)
    except IntegrityError:
        logger.info(
            f"Slot collision on insert: barber={data.barber_id} "
            f"date={data.appointment_date} time={data.appointment_time}"
        )
        raise HTTPException(status_code=409, detail=SLOT_TAKEN_MESSAGE)

    logger.info(f"Appointment {appointment.id} booked by user {user_id}")
    return appointment


def list_my_appointments(session: Optional[Session], user_id: int) -> List[AppointmentWithDetails]:
    enriched = []
    for appointment in crud.get_appointments_by_user_id(session, user_id):
        # Missing barber/service rows come back as None
        item = AppointmentWithDetails.model_validate(appointment)
        barber = crud.get_barber_by_id(session, appointment.barber_id)
        service = crud.get_service_by_id(session, appointment.service_id)
        item.barber = BarberPublic.model_validate(barber) if barber else None
        item.service = ServicePublic.model_validate(service) if service else None
        enriched.append(item)
    return enriched


def _with_service(session: Optional[Session], appointments: List[Appointment]) -> List[AppointmentWithService]:
    enriched = []
    for appointment in appointments:
        item = AppointmentWithService.model_validate(appointment)
        service = crud.get_service_by_id(session, appointment.service_id)
        item.service = ServicePublic.model_validate(service) if service else None
        enriched.append(item)
    return enriched


def list_barber_appointments_by_date(
    session: Optional[Session], barber_id: int, day: date
) -> List[AppointmentWithService]:
    return _with_service(session, crud.get_appointments_by_barber_id_and_date(session, barber_id, day))


def list_upcoming_barber_appointments(session: Optional[Session], barber_id: int) -> List[AppointmentWithService]:
    return _with_service(session, crud.get_upcoming_appointments_by_barber_id(session, barber_id))


def cancel_appointment(session: Optional[Session], appointment_id: int, user_id: int) -> Appointment:
    target = _get_or_404(session, appointment_id)

    # Only the client who booked may cancel
    if target.user_id != user_id:
        raise HTTPException(status_code=403, detail="You are not allowed to cancel this appointment")

    _check_transition(target, AppointmentStatus.cancelled)
    target = crud.set_appointment_status(session, target, AppointmentStatus.cancelled)
    logger.info(f"Appointment {appointment_id} cancelled by user {user_id}")
    return target


def complete_appointment(session: Optional[Session], appointment_id: int, barber_id: int) -> Appointment:
    target = _get_or_404(session, appointment_id)
    _check_barber_owns(target, barber_id)
    _check_transition(target, AppointmentStatus.completed)
    target = crud.set_appointment_status(session, target, AppointmentStatus.completed)
    logger.info(f"Appointment {appointment_id} completed by barber {barber_id}")
    return target


def mark_no_show(
    session: Optional[Session], appointment_id: int, barber_id: int, reason: Optional[str] = None
) -> dict:
    """
    Mark the client as a no-show, count it against them and e-mail them.

    The second no-show blocks the client. The e-mail uses the count after
    this increment and its outcome never fails the request.
    """
    target = _get_or_404(session, appointment_id)
    _check_barber_owns(target, barber_id)
    _check_transition(target, AppointmentStatus.no_show)

    crud.set_appointment_status(session, target, AppointmentStatus.no_show, no_show_reason=reason)
    user = crud.increment_user_no_show_count(session, target.user_id)
    if user is None:
        logger.warning(f"Appointment {appointment_id} references missing user {target.user_id}")
        return {"no_show_count": 0, "is_blocked": False, "email_sent": False}

    logger.info(
        f"Appointment {appointment_id} marked no-show; user {user.id} "
        f"count={user.no_show_count} blocked={user.is_blocked}"
    )

    barber = crud.get_barber_by_id(session, target.barber_id)
    email_sent = send_no_show_email(
        user.email,
        user.name or "Client",
        barber.name if barber else "Barber",
        user.no_show_count,
    )

    return {
        "no_show_count": user.no_show_count,
        "is_blocked": user.is_blocked,
        "email_sent": email_sent,
    }
