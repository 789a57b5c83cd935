import base64
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlmodel import select

from barbershop.auth import decode_access_token
from barbershop.config import SESSION_COOKIE_NAME
from barbershop.models import User
from barbershop.oauth import OAuthError, decode_state

STATE = base64.b64encode(b"https://shop.example/api/oauth/callback").decode()


@pytest.fixture
def provider():
    """Patch the identity provider calls made by the callback."""
    with (
        patch("barbershop.oauth.exchange_code_for_token", return_value="provider-access-token") as exchange,
        patch("barbershop.oauth.get_user_info") as user_info,
    ):
        user_info.return_value = {
            "openId": "carol-openid",
            "name": "Carol",
            "email": "carol@example.com",
            "loginMethod": "google",
        }
        yield exchange, user_info


def _callback(app, **params):
    c = TestClient(app, follow_redirects=False)
    return c.get("/api/oauth/callback", params=params)


def test_decode_state():
    assert decode_state(STATE) == "https://shop.example/api/oauth/callback"
    with pytest.raises(OAuthError):
        decode_state("%%%")


def test_callback_requires_code_and_state(app):
    assert _callback(app, code="abc").status_code == 400
    assert _callback(app, state=STATE).status_code == 400


def test_callback_creates_user_and_issues_session(app, provider, session):
    response = _callback(app, code="abc", state=STATE)

    assert response.status_code == 302
    assert response.headers["location"] == "/"

    user = session.exec(select(User).where(User.open_id == "carol-openid")).first()
    assert user is not None
    assert user.email == "carol@example.com"
    assert user.login_method == "google"
    assert user.role == "user"

    payload = decode_access_token(response.cookies[SESSION_COOKIE_NAME])
    assert payload["open_id"] == "carol-openid"
    assert payload["id"] == user.id


def test_repeat_login_updates_the_same_user(app, provider, session):
    _callback(app, code="abc", state=STATE)
    provider[1].return_value = {"openId": "carol-openid", "name": "Carol B."}
    _callback(app, code="def", state=STATE)

    rows = session.exec(select(User).where(User.open_id == "carol-openid")).all()
    assert len(rows) == 1
    assert rows[0].name == "Carol B."
    # Fields missing from the provider are left as they were
    assert rows[0].email == "carol@example.com"


def test_owner_is_promoted_to_admin(app, provider):
    with patch("barbershop.crud.OWNER_OPEN_ID", "carol-openid"):
        response = _callback(app, code="abc", state=STATE)

    assert decode_access_token(response.cookies[SESSION_COOKIE_NAME])["role"] == "admin"


def test_missing_open_id_is_rejected(app, provider):
    provider[1].return_value = {"name": "No Id"}
    response = _callback(app, code="abc", state=STATE)
    assert response.status_code == 400


def test_provider_failure_returns_500(app, provider):
    provider[0].side_effect = OAuthError("provider down")
    response = _callback(app, code="abc", state=STATE)
    assert response.status_code == 500
    assert response.json() == {"error": "OAuth callback failed"}
