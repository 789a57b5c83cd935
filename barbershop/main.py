# barbershop/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from .config import LOG_LEVEL
from .db import build_engine, init_db
from .routers import appointments_routes, auth_routes, barbers_routes, oauth_routes, services_routes

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

_DEFAULT = object()


def create_app(engine: Optional[Engine] = _DEFAULT) -> FastAPI:
    """Build the API around an explicit engine; None runs without a database."""
    if engine is _DEFAULT:
        engine = build_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.engine)
        yield
        if app.state.engine is not None:
            app.state.engine.dispose()

    app = FastAPI(title="Barbershop booking API", lifespan=lifespan)
    app.state.engine = engine

    @app.get("/health")
    def health_check():
        return {"status": "ok", "database": app.state.engine is not None}

    app.include_router(auth_routes.router)
    app.include_router(barbers_routes.router)
    app.include_router(services_routes.router)
    app.include_router(appointments_routes.router)
    app.include_router(oauth_routes.router)
    return app


app = create_app()
