from __future__ import annotations  # Password hashing capability

from typing import Protocol

import bcrypt

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating
_BCRYPT_MAX_BYTES = 72


class PasswordHasher(Protocol):  # Hash/verify capability used by the auth service
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...


class BcryptHasher:
    """Slow salted hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
        except ValueError:
            return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


__all__ = ["PasswordHasher", "BcryptHasher"]
