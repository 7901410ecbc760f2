"""BcryptHasher — salted one-way hashing and tolerant verification."""

from sensorhub.infrastructure.password_hasher import BcryptHasher

hasher = BcryptHasher(rounds=4)


def test_hash_differs_from_plaintext():
    assert hasher.hash("hunter2") != "hunter2"


def test_hash_is_salted():
    assert hasher.hash("hunter2") != hasher.hash("hunter2")


def test_verify_round_trip():
    hashed = hasher.hash("hunter2")
    assert hasher.verify("hunter2", hashed) is True
    assert hasher.verify("hunter3", hashed) is False


def test_cost_factor_encoded_in_hash():
    assert BcryptHasher(rounds=5).hash("pw").startswith("$2b$05$")


def test_default_cost_factor_is_ten():
    assert BcryptHasher().rounds == 10


def test_malformed_stored_hash_is_false_not_error():
    assert hasher.verify("hunter2", "not-a-bcrypt-hash") is False


def test_long_passwords_compare_on_first_72_bytes():
    long_pw = "a" * 100
    hashed = hasher.hash(long_pw)
    assert hasher.verify(long_pw, hashed) is True
    assert hasher.verify("a" * 72, hashed) is True
