"""Account Service — signup, admin upsert and login over in-memory fakes.

Invariants:
    - Stored password is a hash that verifies against the original plaintext
    - Admin-created accounts can log in and get their device_id back
    - Unknown email and wrong password are indistinguishable
"""

import pytest

from sensorhub.core.errors import (
    InputValidationError, InvalidCredentialsError, ResourceNotFoundError,
)
from sensorhub.services.account_service import AccountService, strip_password


async def test_admin_upsert_stores_hash_not_plaintext(account_service, users, hasher):
    user = await account_service.admin_upsert("a@example.com", "s3cret", "dev1")

    stored = users.rows["dev1"]["password"]
    assert stored != "s3cret"
    assert hasher.verify("s3cret", stored)
    assert "password" not in user
    assert user["device_id"] == "dev1"


async def test_admin_upsert_overwrites_existing_device(account_service, users):
    await account_service.admin_upsert("a@example.com", "one", "dev1")
    user = await account_service.admin_upsert("b@example.com", "two", "dev1")

    assert len(users.rows) == 1
    assert user["email"] == "b@example.com"


@pytest.mark.parametrize("device_id", [None, ""])
async def test_admin_upsert_requires_device_id(account_service, users, device_id):
    with pytest.raises(InputValidationError) as exc_info:
        await account_service.admin_upsert("a@example.com", "pw", device_id)
    assert exc_info.value.message == "Device ID is required"
    assert users.calls == []


async def test_update_credentials_unknown_device(account_service):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await account_service.update_credentials("a@example.com", "pw", "ghost")
    assert exc_info.value.message == "Device ID not found"


async def test_update_credentials_rehashes(account_service, users, hasher):
    await account_service.admin_upsert("old@example.com", "old", "dev1")
    user = await account_service.update_credentials("new@example.com", "new", "dev1")

    assert user["email"] == "new@example.com"
    assert "password" not in user
    assert hasher.verify("new", users.rows["dev1"]["password"])
    assert not hasher.verify("old", users.rows["dev1"]["password"])


async def test_update_credentials_requires_device_id(account_service, users):
    with pytest.raises(InputValidationError):
        await account_service.update_credentials("a@example.com", "pw", None)
    assert users.calls == []


async def test_update_credentials_requires_password(account_service, users):
    with pytest.raises(InputValidationError) as exc_info:
        await account_service.update_credentials("a@example.com", None, "dev1")
    assert exc_info.value.field == "password"
    assert users.calls == []


async def test_login_returns_device_id(account_service):
    await account_service.admin_upsert("a@example.com", "s3cret", "dev42")
    assert await account_service.login("a@example.com", "s3cret") == "dev42"


async def test_login_failures_are_indistinguishable(account_service):
    await account_service.admin_upsert("a@example.com", "s3cret", "dev1")

    with pytest.raises(InvalidCredentialsError) as wrong_pw:
        await account_service.login("a@example.com", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown:
        await account_service.login("nobody@example.com", "s3cret")
    assert wrong_pw.value.message == unknown.value.message
    assert wrong_pw.value.http_status == unknown.value.http_status == 401


@pytest.mark.parametrize("email,password", [(None, "pw"), ("a@example.com", None), ("", "")])
async def test_login_requires_both_fields(account_service, users, email, password):
    with pytest.raises(InputValidationError) as exc_info:
        await account_service.login(email, password)
    assert exc_info.value.message == "Missing email or password"
    assert users.calls == []


def test_strip_password_leaves_other_fields():
    record = {"id": 1, "device_id": "d", "email": "e", "password": "h"}
    assert strip_password(record) == {"id": 1, "device_id": "d", "email": "e"}
    assert "password" in record


class CountingHasher:
    """Wraps a real hasher and records every verify() call."""

    def __init__(self, inner):
        self.inner = inner
        self.verified: list[str] = []

    def hash(self, plaintext):
        return self.inner.hash(plaintext)

    def verify(self, plaintext, hashed):
        self.verified.append(hashed)
        return self.inner.verify(plaintext, hashed)


async def test_both_login_failures_run_one_verification(users, hasher):
    counting = CountingHasher(hasher)
    service = AccountService(users, counting)
    await service.admin_upsert("a@example.com", "s3cret", "dev1")

    with pytest.raises(InvalidCredentialsError):
        await service.login("a@example.com", "wrong")
    assert len(counting.verified) == 1

    with pytest.raises(InvalidCredentialsError):
        await service.login("nobody@example.com", "s3cret")
    assert len(counting.verified) == 2
    assert counting.verified[1] != users.rows["dev1"]["password"]


async def test_unknown_email_uses_supplied_decoy(users, hasher):
    counting = CountingHasher(hasher)
    decoy = hasher.hash("decoy")
    service = AccountService(users, counting, decoy_hash=decoy)

    with pytest.raises(InvalidCredentialsError):
        await service.login("nobody@example.com", "decoy")
    assert counting.verified == [decoy]
