"""
Pytest configuration and shared fixtures.
"""

import os

# Must be set before barbershop.config is imported
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_API_URL", "http://email.test")
os.environ.setdefault("EMAIL_API_KEY", "test-key")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from barbershop.auth import create_access_token, create_barber_token, hash_password
from barbershop.config import SESSION_COOKIE_NAME, BARBER_COOKIE_NAME
from barbershop.main import create_app
from barbershop.models import User, Barber, Service

BARBER_PASSWORD = "barber123"
# bcrypt is slow on purpose, hash once per run
BARBER_PASSWORD_HASH = hash_password(BARBER_PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded(session):
    """Two active barbers, one inactive barber, two services and two clients."""
    carlos = Barber(name="Carlos Silva", description="Classic cuts", password=BARBER_PASSWORD_HASH)
    joao = Barber(name="João Santos", description="Fades", password=BARBER_PASSWORD_HASH)
    retired = Barber(name="Old Timer", password=BARBER_PASSWORD_HASH, is_active=False)
    haircut = Service(name="Traditional Cut", price="R$ 40,00", duration=30, is_featured=True)
    beard = Service(name="Beard", price="R$ 30,00", duration=20)
    alice = User(open_id="alice-openid", name="Alice", email="alice@example.com")
    bob = User(open_id="bob-openid", name="Bob")

    rows = [carlos, joao, retired, haircut, beard, alice, bob]
    session.add_all(rows)
    session.commit()
    for row in rows:
        session.refresh(row)

    return SimpleNamespace(
        carlos=carlos.id,
        joao=joao.id,
        retired=retired.id,
        haircut=haircut.id,
        beard=beard.id,
        alice=alice.id,
        bob=bob.id,
    )


@pytest.fixture
def app(engine):
    return create_app(engine=engine)


@pytest.fixture
def client(app):
    return TestClient(app)


def _user_token(engine, user_id):
    with Session(engine) as session:
        user = session.get(User, user_id)
        return create_access_token(user.id, user.open_id, user.name or "", user.role)


def _barber_token(engine, barber_id):
    with Session(engine) as session:
        barber = session.get(Barber, barber_id)
        return create_barber_token(barber.id, barber.name)


@pytest.fixture
def client_as(app, engine):
    """Factory for a TestClient carrying a client session cookie."""

    def make(user_id):
        c = TestClient(app)
        c.cookies.set(SESSION_COOKIE_NAME, _user_token(engine, user_id))
        return c

    return make


@pytest.fixture
def barber_as(app, engine):
    """Factory for a TestClient carrying a barber session cookie."""

    def make(barber_id):
        c = TestClient(app)
        c.cookies.set(BARBER_COOKIE_NAME, _barber_token(engine, barber_id))
        return c

    return make


@pytest.fixture
def fetch(engine):
    """Read a fresh copy of a row, outside any request session."""

    def get(model, row_id):
        with Session(engine) as session:
            row = session.get(model, row_id)
            if row is not None:
                session.expunge(row)
            return row

    return get
