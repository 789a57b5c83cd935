# barbershop/routers/appointments_routes.py

from typing import List, Optional

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from barbershop import booking
from barbershop.auth import Identity
from barbershop.db import get_session
from barbershop.deps import require_user, require_barber
from barbershop.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentWithDetails,
    ActionResult,
    NoShowCreate,
    NoShowResult,
)

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Optional[Session] = Depends(get_session),
    current_user: Identity = Depends(require_user),
):
    return booking.create_appointment(session, current_user.id, appt)


@router.get("/mine", response_model=List[AppointmentWithDetails])
def my_appointments(
    session: Optional[Session] = Depends(get_session),
    current_user: Identity = Depends(require_user),
):
    return booking.list_my_appointments(session, current_user.id)


@router.patch("/{appt_id}/cancel", response_model=ActionResult)
def cancel_appointment(
    appt_id: int,
    session: Optional[Session] = Depends(get_session),
    current_user: Identity = Depends(require_user),
):
    booking.cancel_appointment(session, appt_id, current_user.id)
    return {"success": True, "message": "Appointment cancelled"}


@router.patch("/{appt_id}/complete", response_model=ActionResult)
def complete_appointment(
    appt_id: int,
    session: Optional[Session] = Depends(get_session),
    current_barber: Identity = Depends(require_barber),
):
    booking.complete_appointment(session, appt_id, current_barber.id)
    return {"success": True, "message": "Appointment completed"}


@router.patch("/{appt_id}/no-show", response_model=NoShowResult)
def mark_no_show(
    appt_id: int,
    body: Optional[NoShowCreate] = Body(default=None),
    session: Optional[Session] = Depends(get_session),
    current_barber: Identity = Depends(require_barber),
):
    reason = body.reason if body is not None else None
    outcome = booking.mark_no_show(session, appt_id, current_barber.id, reason)
    return {"success": True, "message": "Client marked as no-show", **outcome}
