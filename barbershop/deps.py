# barbershop/deps.py

from fastapi import HTTPException, Request

from .auth import Identity, resolve_identity, barber_identity_from_token
from .config import SESSION_COOKIE_NAME, BARBER_COOKIE_NAME, COOKIE_SECURE


def get_identity(request: Request) -> Identity:
    return resolve_identity(request.cookies, SESSION_COOKIE_NAME, BARBER_COOKIE_NAME)


def require_user(request: Request) -> Identity:
    identity = get_identity(request)
    if not identity.is_user:
        raise HTTPException(status_code=401, detail="Please login")
    return identity


def require_barber(request: Request) -> Identity:
    # A barber may also hold a client session, so read the barber cookie directly
    identity = barber_identity_from_token(request.cookies.get(BARBER_COOKIE_NAME))
    if identity is None:
        raise HTTPException(status_code=401, detail="Barber login required")
    return identity


def cookie_options() -> dict:
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": COOKIE_SECURE,
        "path": "/",
    }
