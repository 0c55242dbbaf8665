"""
Adapter: bcrypt password hasher.

Implements PasswordHasher port.
"""

import bcrypt

from visionchat.domain.auth.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes stored as UTF-8 strings."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            # Malformed stored hash
            return False
