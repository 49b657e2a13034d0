# backend/forest_reservation/main.py
"""
Application factory for the forest reservation API.

Everything a request needs (settings, repository factory, slot locks, seed
status and, for the SQL backend, the engine and session factory) is built
here and stored on ``app.state``; there are no module-level stores.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import date
import logging
from typing import AsyncGenerator, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.constants import API_VERSION, BRAND_NAME
from .core.enums import StorageBackend
from .core.slot_lock import KeyedLock
from .database import Base, build_engine, build_session_factory
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .repositories.factory import RepositoryFactory
from .routes import admin, availability, calendar, health, prometheus, reservations
from .services.seeding_service import SeedingService, SeedResult, SeedStatus

logger = logging.getLogger(__name__)

API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Morning/afternoon forest experience booking for kindergartens and schools"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run_seed(app: FastAPI) -> SeedResult:
    """Create the missing slots of the rolling window (blocking)."""
    state = app.state
    session_factory = state.session_factory
    db = session_factory() if session_factory is not None else None
    try:
        seeding_service = SeedingService(
            db,
            state.repository_factory.create_availability_repository(db),
            state.settings,
            state.seed_status,
            today_provider=state.today_provider,
        )
        return seeding_service.seed()
    finally:
        if db is not None:
            db.close()


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables, seed the calendar, and dispose the engine on shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(
        f"Environment: {settings.environment} (storage backend: {settings.storage_backend})"
    )

    engine = app.state.engine
    if engine is not None:
        await asyncio.to_thread(Base.metadata.create_all, engine)

    if settings.seed_on_startup:
        try:
            result = await asyncio.to_thread(run_seed, app)
        except Exception:
            logger.exception("Startup seeding failed")
            raise
        logger.info(
            "Availability window ready",
            extra={
                "slots_created": result.created,
                "window_start": result.window_start.isoformat(),
                "window_end": result.window_end.isoformat(),
            },
        )
    else:
        logger.info("Startup seeding disabled (SEED_ON_STARTUP=false)")

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")
    if engine is not None:
        engine.dispose()


def create_app(
    settings: Optional[Settings] = None,
    today_provider: Optional[Callable[[], date]] = None,
) -> FastAPI:
    """
    Build a configured FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment)
        today_provider: Overrides "today" in the business timezone (tests)

    Returns:
        The application, with its stores wired on ``app.state``
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )

    backend = StorageBackend(settings.storage_backend)
    if backend == StorageBackend.SQL:
        engine = build_engine(settings.database_url, echo=settings.sql_echo)
        session_factory = build_session_factory(engine)
    else:
        engine = None
        session_factory = None

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.repository_factory = RepositoryFactory(backend)
    app.state.slot_locks = KeyedLock("slot")
    app.state.seed_status = SeedStatus()
    app.state.today_provider = today_provider

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    app.add_middleware(PrometheusMiddleware)

    app.include_router(availability.router)
    app.include_router(calendar.router)
    app.include_router(reservations.router)
    app.include_router(admin.router)
    app.include_router(health.router)
    app.include_router(prometheus.router)

    logger.debug("CORS allow_origins=%s", settings.cors_origins)
    return app


app = create_app()
