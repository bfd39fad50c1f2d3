from typing import Optional

import bcrypt

# bcrypt only reads the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt hashing with a constant-cost check for unknown accounts"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"not-a-password", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(self.rounds)).decode(
            "utf-8"
        )

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """
        Check password against a stored hash.

        With no stored hash a comparison against a dummy hash still runs so
        the response time does not reveal whether the account exists.
        """
        if not password_hash:
            bcrypt.checkpw(_encode(password), self._dummy_hash)
            return False
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
