# barbershop/routers/oauth_routes.py

import logging
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session

from barbershop import crud, oauth
from barbershop.auth import create_access_token
from barbershop.config import SESSION_COOKIE_NAME, SESSION_DAYS
from barbershop.db import get_session
from barbershop.deps import cookie_options

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/oauth",
    tags=["oauth"],
)


@router.get("/callback")
def oauth_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    session: Optional[Session] = Depends(get_session),
):
    if not code or not state:
        return JSONResponse(status_code=400, content={"error": "code and state are required"})

    try:
        access_token = oauth.exchange_code_for_token(code, state)
        user_info = oauth.get_user_info(access_token)

        open_id = user_info.get("openId")
        if not open_id:
            return JSONResponse(status_code=400, content={"error": "openId missing from user info"})

        # Re-issued on every login; last_signed_in is refreshed by the upsert
        user = crud.upsert_user(
            session,
            open_id=open_id,
            name=user_info.get("name"),
            email=user_info.get("email"),
            login_method=user_info.get("loginMethod") or user_info.get("platform"),
        )
    except Exception as e:
        logger.error(f"OAuth callback failed: {e}")
        return JSONResponse(status_code=500, content={"error": "OAuth callback failed"})

    token = create_access_token(user.id, user.open_id, user.name or "", user.role)
    response = RedirectResponse(url="/", status_code=302)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=int(timedelta(days=SESSION_DAYS).total_seconds()),
        **cookie_options(),
    )
    logger.info(f"User {user.id} signed in")
    return response
