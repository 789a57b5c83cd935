# barbershop/routers/barbers_routes.py

import logging
from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlmodel import Session

from barbershop import booking, crud
from barbershop.auth import create_barber_token, verify_password, barber_identity_from_token
from barbershop.config import BARBER_COOKIE_NAME, SESSION_DAYS
from barbershop.db import get_session
from barbershop.deps import cookie_options
from barbershop.schemas import BarberPublic, BarberLogin, BarberSession, AppointmentWithService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/barbers",
    tags=["barbers"],
)


@router.get("", response_model=List[BarberPublic])
def list_barbers(session: Optional[Session] = Depends(get_session)):
    return crud.get_active_barbers(session)


@router.post("/login", response_model=BarberSession)
def login(
    credentials: BarberLogin,
    response: Response,
    session: Optional[Session] = Depends(get_session),
):
    barber = crud.get_barber_by_name(session, credentials.name)

    if barber is None or not barber.is_active or not verify_password(credentials.password, barber.password):
        logger.warning(f"Failed barber login for {credentials.name!r}")
        raise HTTPException(status_code=401, detail="Invalid name or password")

    token = create_barber_token(barber.id, barber.name)
    response.set_cookie(
        BARBER_COOKIE_NAME,
        token,
        max_age=int(timedelta(days=SESSION_DAYS).total_seconds()),
        **cookie_options(),
    )
    return {"id": barber.id, "name": barber.name}


@router.get("/me", response_model=Optional[BarberSession])
def me(request: Request):
    identity = barber_identity_from_token(request.cookies.get(BARBER_COOKIE_NAME))
    if identity is None:
        return None
    return {"id": identity.id, "name": identity.name}


@router.get("/{barber_id}/appointments", response_model=List[AppointmentWithService])
def barber_appointments(
    barber_id: int,
    on_date: Optional[date] = None,
    session: Optional[Session] = Depends(get_session),
):
    # Public schedule: a given day, or everything still ahead
    if on_date is not None:
        return booking.list_barber_appointments_by_date(session, barber_id, on_date)
    return booking.list_upcoming_barber_appointments(session, barber_id)
