from fastapi.testclient import TestClient

from barbershop.auth import decode_barber_token
from barbershop.config import BARBER_COOKIE_NAME

from conftest import BARBER_PASSWORD


def test_list_only_active_barbers(seeded, client):
    response = client.get("/barbers")
    assert response.status_code == 200
    barbers = response.json()

    assert [b["name"] for b in barbers] == ["Carlos Silva", "João Santos"]
    assert barbers[0]["description"] == "Classic cuts"
    assert "password" not in barbers[0]


def test_login_with_valid_credentials_sets_session(seeded, app):
    c = TestClient(app)
    response = c.post("/barbers/login", json={"name": "Carlos Silva", "password": BARBER_PASSWORD})

    assert response.status_code == 200
    assert response.json() == {"id": seeded.carlos, "name": "Carlos Silva"}

    cookie = response.cookies.get(BARBER_COOKIE_NAME)
    assert cookie is not None
    assert decode_barber_token(cookie)["id"] == seeded.carlos
    assert "Max-Age=604800" in response.headers["set-cookie"]


def test_login_with_wrong_password_is_unauthorized(seeded, client):
    response = client.post("/barbers/login", json={"name": "Carlos Silva", "password": "wrongpassword"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid name or password"


def test_login_unknown_or_inactive_barber_is_unauthorized(seeded, client):
    assert client.post("/barbers/login", json={"name": "Nobody", "password": BARBER_PASSWORD}).status_code == 401
    assert client.post("/barbers/login", json={"name": "Old Timer", "password": BARBER_PASSWORD}).status_code == 401


def test_me_returns_barber_from_session(seeded, barber_as):
    response = barber_as(seeded.carlos).get("/barbers/me")
    assert response.status_code == 200
    assert response.json() == {"id": seeded.carlos, "name": "Carlos Silva"}


def test_me_is_null_without_session(client):
    assert client.get("/barbers/me").json() is None

    client.cookies.set(BARBER_COOKIE_NAME, "not-a-token")
    assert client.get("/barbers/me").json() is None


def test_list_services(seeded, client):
    response = client.get("/services")
    assert response.status_code == 200
    services = response.json()

    assert [s["name"] for s in services] == ["Traditional Cut", "Beard"]
    assert services[0]["price"] == "R$ 40,00"
    assert services[0]["duration"] == 30
    assert services[0]["is_featured"] is True


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "database": True}
