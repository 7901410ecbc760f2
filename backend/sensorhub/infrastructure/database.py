"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - One AsyncSession per request; closed on every exit path
    - Every store failure is rolled back, logged with driver detail, and
      re-raised as DatabaseError carrying a generic message
    - Connection pool uses pool_pre_ping for stale connection detection
    - TLS to PostgreSQL is enabled in production without certificate verification

Design Decisions:
    - Manager constructed in the FastAPI lifespan and stored on app.state;
      no module-level singleton, tests inject their own engine via from_engine()
    - expire_on_commit=False: prevents lazy-load issues in async context
    - sslmode stripped from the URL: asyncpg takes TLS via connect_args instead
"""

import logging
import ssl
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from sensorhub.core.errors import DatabaseError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def translate_db_errors(
    session: AsyncSession, operation: str, message: str,
) -> AsyncGenerator[None, None]:
    """Roll back and convert SQLAlchemy failures into DatabaseError(message)."""
    try:
        yield
    except IntegrityError as e:
        await session.rollback()
        logger.error(
            f"DB integrity error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise DatabaseError(message, operation) from e
    except OperationalError as e:
        await session.rollback()
        logger.error(
            f"DB operational error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise DatabaseError(message, operation) from e
    except DBAPIError as e:
        await session.rollback()
        logger.error(
            f"DB driver error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise DatabaseError(message, operation) from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            f"SQLAlchemy error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise DatabaseError(message, operation) from e


def _insecure_tls_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def build_engine_options(
    database_url: str, use_ssl: bool = False,
    pool_size: int = 10, max_overflow: int = 5,
) -> tuple[URL, dict]:
    """Translate settings into (url, create_async_engine kwargs)."""
    url = make_url(database_url)
    options: dict = {}
    if url.get_backend_name() != "postgresql":
        return url, options

    sslmode = url.query.get("sslmode")
    if sslmode is not None:
        url = url.difference_update_query(["sslmode"])
    connect_args: dict = {}
    if use_ssl:
        connect_args["ssl"] = _insecure_tls_context()
    elif sslmode and sslmode != "disable":
        connect_args["ssl"] = sslmode
    options.update(
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args=connect_args,
    )
    return url, options


class DatabaseSessionManager:
    """Owns the engine (connection pool) and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, use_ssl: bool = False,
        pool_size: int = 10, max_overflow: int = 5,
    ):
        url, options = build_engine_options(
            database_url, use_ssl, pool_size, max_overflow,
        )
        self._bind(create_async_engine(url, **options))

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            async with translate_db_errors(
                session, "session", "Database operation failed",
            ):
                yield session
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness checks)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """Return the manager installed on app.state by the lifespan."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with get_db_manager(request).session() as session:
        yield session
