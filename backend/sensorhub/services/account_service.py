"""Account Service — device-bound signup, admin upsert, and login.

Invariants:
    - Plaintext passwords are hashed before reaching a repository
    - Every returned user record has its password removed
    - Unknown email and wrong password raise the same InvalidCredentialsError
    - Each operation issues exactly one repository call

Design Decisions:
    - bcrypt runs in a worker thread: it is CPU-bound and would stall the event loop
    - Login returns the device_id only; no session token is issued
    - Unknown emails are checked against a decoy hash so both login failures
      cost one bcrypt verification
"""

import asyncio
import logging
import secrets

from sensorhub.core.domain_types import DeviceId
from sensorhub.core.errors import (
    ErrorContext, InputValidationError, InvalidCredentialsError,
    ResourceNotFoundError,
)
from sensorhub.core.repository_protocols import Hasher, UserRepository

logger = logging.getLogger(__name__)


def strip_password(record: dict) -> dict:
    """Copy of a user record without the password hash."""
    return {k: v for k, v in record.items() if k != "password"}


def _require_device_id(device_id: str | None) -> DeviceId:
    if not device_id:
        raise InputValidationError("Device ID is required", "device_id")
    return DeviceId(device_id)


def _require_password(password: str | None) -> str:
    if not password:
        raise InputValidationError("Password is required", "password")
    return password


class AccountService:
    """User-facing account operations over a UserRepository and a Hasher."""

    def __init__(
        self, users: UserRepository, hasher: Hasher, decoy_hash: str | None = None,
    ):
        self.users = users
        self.hasher = hasher
        self._decoy_hash = decoy_hash

    async def _decoy(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = await self._hash(secrets.token_urlsafe(16))
        return self._decoy_hash

    async def _hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hasher.hash, plaintext)

    async def update_credentials(
        self, email: str | None, password: str | None, device_id: str | None,
    ) -> dict:
        """Set email and password on the existing account for device_id."""
        device = _require_device_id(device_id)
        hashed = await self._hash(_require_password(password))
        record = await self.users.update_credentials(device, email, hashed)
        if record is None:
            raise ResourceNotFoundError(
                "Device ID not found", "User",
                ErrorContext(device_id=device),
            )
        logger.info("User credentials updated", extra={"device_id": device})
        return strip_password(record)

    async def admin_upsert(
        self, email: str | None, password: str | None, device_id: str | None,
    ) -> dict:
        """Create the account for device_id, or overwrite its email and password."""
        device = _require_device_id(device_id)
        hashed = await self._hash(_require_password(password))
        record = await self.users.upsert(device, email, hashed)
        logger.info("User created or updated by admin", extra={"device_id": device})
        return strip_password(record)

    async def login(self, email: str | None, password: str | None) -> DeviceId:
        """Return the device_id bound to (email, password)."""
        if not email or not password:
            raise InputValidationError(
                "Missing email or password", "email" if not email else "password",
            )
        record = await self.users.get_by_email(email)
        stored = record["password"] if record else await self._decoy()
        valid = await asyncio.to_thread(self.hasher.verify, password, stored)
        if record is None or not valid:
            raise InvalidCredentialsError()
        return DeviceId(record["device_id"])
