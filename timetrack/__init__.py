"""Application factory and top-level wiring for the timer service.

``create_app`` brings together configuration, the database handle, the
session resolver, routers and error handling. The database engine is passed
in (or built from settings) and kept on ``app.state``; nothing holds a
process-wide connection.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import AppSettings, get_settings
from .core.errors import (
    TimeTrackError,
    http_exception_handler,
    timetrack_exception_handler,
    validation_exception_handler,
)
from .db.migrate import run_migrations
from .db.session import Base, make_engine, make_session_factory
from .middlewares import RequestIdMiddleware, SessionResolverMiddleware

# Importing the models registers them with the metadata. Without this step
# ``Base.metadata.create_all`` would not know about our tables.
from . import models as _models  # noqa: F401


def create_app(settings: AppSettings | None = None, engine: Engine | None = None) -> FastAPI:
    settings = settings or get_settings()
    engine = engine or make_engine(settings.database_url)

    # ``create_all`` covers brand-new databases; ``run_migrations`` upgrades
    # databases created by earlier releases.
    Base.metadata.create_all(bind=engine)
    run_migrations(engine)

    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    # Starlette runs the last-added middleware first: the request id is set
    # before the session resolver looks anything up.
    app.add_middleware(SessionResolverMiddleware, cookie_name=settings.SESSION_COOKIE_NAME)
    app.add_middleware(RequestIdMiddleware)

    from .routers import api_timers as api_timers_router
    from .routers import auth_ui as auth_ui_router

    # Login, signup, logout: public routes.
    app.include_router(auth_ui_router.router)
    # Timer API: every route requires a resolved session.
    app.include_router(api_timers_router.router)

    app.add_exception_handler(TimeTrackError, timetrack_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health", tags=["ops"])
    async def health() -> dict[str, bool]:
        return {"ok": True}

    if settings.METRICS_ENABLED:
        # Each app gets its own registry so several apps can live in one process.
        instrumentator = Instrumentator(registry=CollectorRegistry())
        instrumentator.instrument(app).expose(app, include_in_schema=False)
        app.state.instrumentator = instrumentator

    return app


__all__ = ["create_app"]
