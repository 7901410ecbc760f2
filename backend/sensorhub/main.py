"""SensorHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SensorHubError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The store handle is built in the lifespan and kept on app.state

Design Decisions:
    - create_app() factory: tests build apps without touching the network;
      the module-level `app` is what uvicorn serves
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sensorhub import __version__
from sensorhub.api.error_handlers import register_error_handlers
from sensorhub.api.routes import accounts, health, readings
from sensorhub.config import Settings, get_settings
from sensorhub.infrastructure.database import DatabaseSessionManager
from sensorhub.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        app.state.db_manager = DatabaseSessionManager(
            settings.database_url,
            use_ssl=settings.database_ssl,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        logger.info(
            f"SensorHub API started ({settings.environment}, "
            f"ssl={'on' if settings.database_ssl else 'off'})",
        )
        yield
        await app.state.db_manager.dispose()
        logger.info("SensorHub API shutting down")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="SensorHub API", version=__version__,
        lifespan=_build_lifespan(settings),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(accounts.router)
    app.include_router(readings.router)
    return app


app = create_app()
