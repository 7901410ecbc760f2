"""SQL Repositories — SQLAlchemy implementations of the boundary Protocols.

Invariants:
    - One statement per method (plus commit for writes); no multi-statement transactions
    - Every store call runs inside translate_db_errors → DatabaseError on failure
    - Returned dicts come from ORM.to_dict(); callers strip the password

Design Decisions:
    - Upsert uses the dialect's own insert() so ON CONFLICT (device_id) runs on
      PostgreSQL in production and on SQLite in tests
    - populate_existing on RETURNING statements: identity map never serves stale rows
    - Secondary ordering by id keeps equal timestamps in insertion order
"""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhub.core.domain_types import DeviceId
from sensorhub.infrastructure.database import translate_db_errors
from sensorhub.models.sensor_reading import SensorReading
from sensorhub.models.user import User

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}
_REFRESH = {"populate_existing": True}


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def update_credentials(
        self, device_id: DeviceId, email: str | None, password_hash: str,
    ) -> dict | None:
        stmt = (
            update(User)
            .where(User.device_id == device_id)
            .values(email=email, password=password_hash)
            .returning(User)
        )
        async with translate_db_errors(
            self.db, "update_credentials", "Error updating user",
        ):
            result = await self.db.scalars(stmt, execution_options=_REFRESH)
            user = result.one_or_none()
            await self.db.commit()
        return user.to_dict() if user else None

    async def get_by_email(self, email: str) -> dict | None:
        stmt = select(User).where(User.email == email).order_by(User.id).limit(1)
        async with translate_db_errors(self.db, "get_by_email", "Server error"):
            result = await self.db.scalars(stmt)
            user = result.first()
        return user.to_dict() if user else None

    async def upsert(
        self, device_id: DeviceId, email: str | None, password_hash: str,
    ) -> dict:
        dialect = self.db.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect, postgresql_insert)
        stmt = insert(User).values(
            device_id=device_id, email=email, password=password_hash,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["device_id"],
            set_={"email": stmt.excluded.email, "password": stmt.excluded.password},
        ).returning(User)
        async with translate_db_errors(
            self.db, "upsert_user", "Error processing signup",
        ):
            result = await self.db.scalars(stmt, execution_options=_REFRESH)
            user = result.one()
            await self.db.commit()
        return user.to_dict()


class SqlReadingRepository:
    """Append-only sensor reading persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, device_id: DeviceId, values: dict[str, float]) -> dict:
        reading = SensorReading(device_id=device_id, **values)
        async with translate_db_errors(self.db, "add_reading", "Failed to store data"):
            self.db.add(reading)
            await self.db.commit()
            await self.db.refresh(reading)
        return reading.to_dict()

    async def list_desc(self, device_id: DeviceId) -> list[dict]:
        stmt = (
            select(SensorReading)
            .where(SensorReading.device_id == device_id)
            .order_by(SensorReading.timestamp.desc(), SensorReading.id.desc())
        )
        async with translate_db_errors(self.db, "list_readings", "Failed to fetch data"):
            result = await self.db.scalars(stmt)
            readings = result.all()
        return [r.to_dict() for r in readings]

    async def latest(self, device_id: DeviceId) -> dict | None:
        stmt = (
            select(SensorReading)
            .where(SensorReading.device_id == device_id)
            .order_by(SensorReading.timestamp.desc(), SensorReading.id.desc())
            .limit(1)
        )
        async with translate_db_errors(
            self.db, "latest_reading", "Failed to fetch latest data",
        ):
            result = await self.db.scalars(stmt)
            reading = result.first()
        return reading.to_dict() if reading else None

    async def between_asc(
        self, device_id: DeviceId, start: datetime, end: datetime,
    ) -> list[dict]:
        stmt = (
            select(SensorReading)
            .where(SensorReading.device_id == device_id)
            .where(SensorReading.timestamp >= start)
            .where(SensorReading.timestamp <= end)
            .order_by(SensorReading.timestamp.asc(), SensorReading.id.asc())
        )
        async with translate_db_errors(
            self.db, "reading_history", "Failed to fetch historical data",
        ):
            result = await self.db.scalars(stmt)
            readings = result.all()
        return [r.to_dict() for r in readings]
