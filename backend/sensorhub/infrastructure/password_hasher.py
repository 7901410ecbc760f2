"""Password Hasher — bcrypt implementation of the Hasher protocol.

Invariants:
    - hash() output is salted; two calls with the same plaintext differ
    - verify() never raises on a malformed stored hash, it returns False
    - Cost factor fixed per instance (default 10)
    - Only the first 72 bytes of a password are significant (bcrypt limit)
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

_BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptHasher:
    """Salted one-way hashing with a fixed bcrypt cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False
