"""Dependency Providers — wire request-scoped sessions into services.

Invariants:
    - One AsyncSession per request, shared by every repository in that request
    - Tests replace get_db, get_hasher, or a whole service via app.dependency_overrides
"""

import secrets
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhub.config import get_settings
from sensorhub.core.repository_protocols import Hasher
from sensorhub.infrastructure.database import get_db
from sensorhub.infrastructure.password_hasher import BcryptHasher
from sensorhub.infrastructure.sql_repositories import (
    SqlReadingRepository, SqlUserRepository,
)
from sensorhub.services.account_service import AccountService
from sensorhub.services.reading_service import ReadingService


@lru_cache
def get_hasher() -> Hasher:
    return BcryptHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_decoy_hash() -> str:
    """bcrypt hash of a random secret at the configured cost, built once per process."""
    return get_hasher().hash(secrets.token_urlsafe(16))


def get_account_service(
    db: AsyncSession = Depends(get_db),
    hasher: Hasher = Depends(get_hasher),
    decoy_hash: str = Depends(get_decoy_hash),
) -> AccountService:
    return AccountService(SqlUserRepository(db), hasher, decoy_hash)


def get_reading_service(db: AsyncSession = Depends(get_db)) -> ReadingService:
    return ReadingService(SqlReadingRepository(db))
