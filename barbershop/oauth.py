# barbershop/oauth.py
#
# Client for the external identity provider used by the client login.

import base64
import binascii
import logging

import httpx

from .config import OAUTH_SERVER_URL, OAUTH_APP_ID

logger = logging.getLogger(__name__)

OAUTH_TIMEOUT_SECONDS = 10.0


class OAuthError(Exception):
    pass


def decode_state(state: str) -> str:
    """The state parameter carries the redirect URI, base64 encoded."""
    try:
        return base64.b64decode(state.encode(), validate=True).decode()
    except (binascii.Error, UnicodeDecodeError) as e:
        raise OAuthError("Invalid OAuth state") from e


def exchange_code_for_token(code: str, state: str) -> str:
    payload = {
        "clientId": OAUTH_APP_ID,
        "grantType": "authorization_code",
        "code": code,
        "redirectUri": decode_state(state),
    }
    try:
        response = httpx.post(f"{OAUTH_SERVER_URL}/oauth/token", json=payload, timeout=OAUTH_TIMEOUT_SECONDS)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise OAuthError(f"Token exchange failed: {e}") from e

    access_token = response.json().get("accessToken")
    if not access_token:
        raise OAuthError("Token exchange returned no access token")
    return access_token


def get_user_info(access_token: str) -> dict:
    try:
        response = httpx.get(
            f"{OAUTH_SERVER_URL}/oauth/userinfo",
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=OAUTH_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise OAuthError(f"User info request failed: {e}") from e
    return response.json()
