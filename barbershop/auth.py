# barbershop/auth.py

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import SECRET_KEY, SESSION_DAYS

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
BARBER_TOKEN_KIND = "barber"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # Stored value is not a recognised hash
        logger.warning("Unrecognised password hash format")
        return False


def _encode(data: dict, expires_days: int) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode["iat"] = now
    to_encode["exp"] = now + timedelta(days=expires_days)
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _decode(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        # Invalid or expired token
        return None


def create_access_token(user_id: int, open_id: str, name: str, role: str,
                        expires_days: int = SESSION_DAYS) -> str:
    """Sign the client session token carried by the session cookie."""
    return _encode({"id": user_id, "open_id": open_id, "name": name, "role": role}, expires_days)


def decode_access_token(token: str) -> Optional[dict]:
    payload = _decode(token)
    if payload is None or payload.get("kind") == BARBER_TOKEN_KIND:
        return None
    if not isinstance(payload.get("id"), int) or not payload.get("open_id"):
        return None
    return payload


def create_barber_token(barber_id: int, name: str, expires_days: int = SESSION_DAYS) -> str:
    return _encode({"kind": BARBER_TOKEN_KIND, "id": barber_id, "name": name}, expires_days)


def decode_barber_token(token: str) -> Optional[dict]:
    payload = _decode(token)
    if payload is None or payload.get("kind") != BARBER_TOKEN_KIND:
        return None
    if not isinstance(payload.get("id"), int):
        return None
    return payload


@dataclass(frozen=True)
class Identity:
    """Who is calling: an anonymous visitor, a signed-in client or a barber."""

    kind: str  # "anonymous", "user" or "barber"
    id: Optional[int] = None
    name: Optional[str] = None
    open_id: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_user(self) -> bool:
        return self.kind == "user"

    @property
    def is_barber(self) -> bool:
        return self.kind == "barber"


ANONYMOUS = Identity(kind="anonymous")


def user_identity_from_token(token: Optional[str]) -> Optional[Identity]:
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    return Identity(
        kind="user",
        id=payload["id"],
        name=payload.get("name") or "",
        open_id=payload["open_id"],
        role=payload.get("role") or "user",
    )


def barber_identity_from_token(token: Optional[str]) -> Optional[Identity]:
    if not token:
        return None
    payload = decode_barber_token(token)
    if payload is None:
        return None
    return Identity(kind="barber", id=payload["id"], name=payload.get("name") or "")


def resolve_identity(cookies: dict, session_cookie: str, barber_cookie: str) -> Identity:
    """Client token first, then the barber session, otherwise anonymous."""
    return (
        user_identity_from_token(cookies.get(session_cookie))
        or barber_identity_from_token(cookies.get(barber_cookie))
        or ANONYMOUS
    )
