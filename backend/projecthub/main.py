"""Entry point for the FastAPI application.

Serve with ``uvicorn projecthub.main:create_app --factory``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from .config import resolve_log_level
from .db import create_db_engine, init_db
from .logging_config import setup_logging
from .routes import auth
from .routes import health
from .routes import projects


def create_app(engine: Engine | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        engine: Database engine to serve requests from. When omitted, one is
            built from the configured database URL and disposed on shutdown.
    """

    setup_logging(resolve_log_level())
    owns_engine = engine is None
    app_engine = engine if engine is not None else create_db_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(app_engine)
        yield
        if owns_engine:
            app_engine.dispose()

    app = FastAPI(
        title="projecthub",
        version="0.1.0",
        description=(
            "Owner-scoped project API. Requests carry a signed bearer session "
            "token; projects of other users are reported as not found."
        ),
        lifespan=lifespan,
    )
    app.state.engine = app_engine
    app.include_router(auth.router)
    app.include_router(health.router)
    app.include_router(projects.router)
    return app
