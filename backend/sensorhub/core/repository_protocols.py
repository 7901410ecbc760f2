"""Boundary Protocols — contracts between services and infrastructure.

Invariants:
    - Services NEVER import SQLAlchemy or bcrypt — they see only these Protocols
    - Every repository method issues exactly one store statement
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no base class
    - Repositories return plain dicts: the ORM never leaks past the boundary
"""

from datetime import datetime
from typing import Protocol

from sensorhub.core.domain_types import DeviceId


class Hasher(Protocol):
    """One-way salted password hashing capability."""
    def hash(self, plaintext: str) -> str: ...
    def verify(self, plaintext: str, hashed: str) -> bool: ...


class UserRepository(Protocol):
    """Contract for user persistence. Returned dicts include the password hash."""
    async def update_credentials(
        self, device_id: DeviceId, email: str | None, password_hash: str,
    ) -> dict | None: ...
    async def get_by_email(self, email: str) -> dict | None: ...
    async def upsert(
        self, device_id: DeviceId, email: str | None, password_hash: str,
    ) -> dict: ...


class ReadingRepository(Protocol):
    """Contract for sensor reading persistence (append-only)."""
    async def add(self, device_id: DeviceId, values: dict[str, float]) -> dict: ...
    async def list_desc(self, device_id: DeviceId) -> list[dict]: ...
    async def latest(self, device_id: DeviceId) -> dict | None: ...
    async def between_asc(
        self, device_id: DeviceId, start: datetime, end: datetime,
    ) -> list[dict]: ...
