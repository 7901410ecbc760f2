"""Service test fixtures — in-memory repositories and hashers.

Invariants:
    - Fakes satisfy the core Protocols structurally (no base classes)
    - Fakes record every call so tests can assert "no write happened"
    - Timestamps come from an injectable clock, advanced explicitly by tests
"""

from datetime import datetime, timedelta, timezone

import pytest

from sensorhub.infrastructure.password_hasher import BcryptHasher
from sensorhub.services.account_service import AccountService
from sensorhub.services.reading_service import ReadingService


class InMemoryUserRepository:
    def __init__(self):
        self.rows: dict[str, dict] = {}
        self.calls: list[str] = []
        self._next_id = 1

    async def update_credentials(self, device_id, email, password_hash):
        self.calls.append("update_credentials")
        row = self.rows.get(device_id)
        if row is None:
            return None
        row.update(email=email, password=password_hash)
        return dict(row)

    async def get_by_email(self, email):
        self.calls.append("get_by_email")
        for row in sorted(self.rows.values(), key=lambda r: r["id"]):
            if row["email"] == email:
                return dict(row)
        return None

    async def upsert(self, device_id, email, password_hash):
        self.calls.append("upsert")
        row = self.rows.get(device_id)
        if row is None:
            row = {"id": self._next_id, "device_id": device_id}
            self._next_id += 1
            self.rows[device_id] = row
        row.update(email=email, password=password_hash)
        return dict(row)


class InMemoryReadingRepository:
    def __init__(self, start: datetime):
        self.rows: list[dict] = []
        self.now = start

    def advance(self, **delta) -> None:
        self.now += timedelta(**delta)

    async def add(self, device_id, values):
        row = {
            "id": len(self.rows) + 1, "device_id": device_id,
            **values, "timestamp": self.now,
        }
        self.rows.append(row)
        return dict(row)

    def _for(self, device_id):
        return [r for r in self.rows if r["device_id"] == device_id]

    async def list_desc(self, device_id):
        return sorted(
            self._for(device_id),
            key=lambda r: (r["timestamp"], r["id"]), reverse=True,
        )

    async def latest(self, device_id):
        rows = await self.list_desc(device_id)
        return rows[0] if rows else None

    async def between_asc(self, device_id, start, end):
        return sorted(
            (r for r in self._for(device_id) if start <= r["timestamp"] <= end),
            key=lambda r: (r["timestamp"], r["id"]),
        )


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def hasher():
    return BcryptHasher(rounds=4)


@pytest.fixture
def account_service(users, hasher):
    return AccountService(users, hasher)


@pytest.fixture
def readings():
    return InMemoryReadingRepository(datetime(2024, 1, 1, 8, tzinfo=timezone.utc))


@pytest.fixture
def reading_service(readings):
    return ReadingService(readings)
