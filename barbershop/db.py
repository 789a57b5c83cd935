# barbershop/db.py

import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from .config import DATABASE_URL, DB_POOL_SIZE, DB_POOL_TIMEOUT, DB_POOL_RECYCLE

logger = logging.getLogger(__name__)


def build_engine(url: Optional[str] = DATABASE_URL) -> Optional[Engine]:
    """Create the engine the app runs on, or None when no database is configured."""
    if not url:
        logger.error("DATABASE_URL not configured, running without a database")
        return None

    if url.startswith("sqlite"):
        # SQLite file database, required for SQLite + FastAPI
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Small pool: the API is deployed on serverless workers
    engine = create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=DB_POOL_TIMEOUT,
        pool_recycle=DB_POOL_RECYCLE,
    )
    logger.info("Database engine created (pool_size=%s)", DB_POOL_SIZE)
    return engine


def init_db(engine: Optional[Engine]) -> None:
    if engine is None:
        return
    # Import so the tables are registered on the metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


# Dependency: one session per request, None when the app has no engine
def get_session(request: Request):
    engine = request.app.state.engine
    if engine is None:
        yield None
        return
    with Session(engine) as session:
        yield session
