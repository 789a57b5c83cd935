# barbershop/seed.py
#
# python -m barbershop.seed

import logging

from sqlmodel import Session, select

from .auth import hash_password
from .db import build_engine, init_db
from .models import Barber, Service

logger = logging.getLogger(__name__)

DEFAULT_BARBER_PASSWORD = "barber123"  # noqa: S105 - demo credentials

BARBERS = [
    {"name": "Carlos Silva", "description": "Specialist in classic and modern cuts"},
    {"name": "João Santos", "description": "Expert in beards and fades"},
    {"name": "Pedro Oliveira", "description": "Master of styled cuts"},
    {"name": "Lucas Ferreira", "description": "Beard design specialist"},
]

SERVICES = [
    {"name": "Traditional Cut", "description": "Classic scissors and clipper cut", "price": "R$ 40,00", "duration": 30, "is_featured": True},
    {"name": "Cut + Beard", "description": "Full cut with beard design", "price": "R$ 60,00", "duration": 45, "is_featured": True},
    {"name": "Beard", "description": "Beard trim and shaping", "price": "R$ 30,00", "duration": 20, "is_featured": False},
    {"name": "Fade", "description": "Modern fade cut", "price": "R$ 45,00", "duration": 35, "is_featured": True},
    {"name": "Eyebrows", "description": "Eyebrow design", "price": "R$ 15,00", "duration": 10, "is_featured": False},
    {"name": "Pigmentation", "description": "Beard or hair pigmentation", "price": "R$ 80,00", "duration": 60, "is_featured": False},
]


def seed(session: Session, password: str = DEFAULT_BARBER_PASSWORD) -> dict:
    """Insert the default barbers and services, skipping names already present."""
    existing_barbers = set(session.exec(select(Barber.name)).all())
    existing_services = set(session.exec(select(Service.name)).all())

    added = {"barbers": 0, "services": 0}
    for data in BARBERS:
        if data["name"] in existing_barbers:
            continue
        session.add(Barber(password=hash_password(password), **data))
        added["barbers"] += 1

    for data in SERVICES:
        if data["name"] in existing_services:
            continue
        session.add(Service(**data))
        added["services"] += 1

    session.commit()
    return added


def main():
    logging.basicConfig(level=logging.INFO)
    engine = build_engine()
    if engine is None:
        raise SystemExit("DATABASE_URL is not configured")

    init_db(engine)
    with Session(engine) as session:
        added = seed(session)

    logger.info(f"Seed finished: {added['barbers']} barbers, {added['services']} services added")
    for data in BARBERS:
        logger.info(f"Barber login: {data['name']} / {DEFAULT_BARBER_PASSWORD}")


if __name__ == "__main__":
    main()
