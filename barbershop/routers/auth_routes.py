# barbershop/routers/auth_routes.py

from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from barbershop import crud
from barbershop.auth import Identity
from barbershop.config import SESSION_COOKIE_NAME, BARBER_COOKIE_NAME
from barbershop.db import get_session
from barbershop.deps import get_identity, cookie_options
from barbershop.schemas import UserPublic, ActionResult

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.get("/me", response_model=Optional[UserPublic])
def me(
    session: Optional[Session] = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    if not identity.is_user:
        return None

    user = crud.get_user_by_id(session, identity.id)
    if user is not None:
        return user

    # No database row to read: answer from the token alone
    if session is None:
        return {
            "id": identity.id,
            "open_id": identity.open_id,
            "name": identity.name,
            "role": identity.role,
        }
    return None


@router.post("/logout", response_model=ActionResult)
def logout(response: Response):
    options = cookie_options()
    response.delete_cookie(SESSION_COOKIE_NAME, **options)
    response.delete_cookie(BARBER_COOKIE_NAME, **options)
    return {"success": True}
