"""Password hashing utilities.

Learn: Uses bcrypt for password hashing. bcrypt generates a random salt
on every call and embeds it (with the cost factor) in the hash string,
so hashing the same password twice gives two different hashes that
both verify. The cost factor comes from Settings.bcrypt_rounds.
"""

import bcrypt

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72

_DUMMY_PASSWORD = b"playlist-api-timing-dummy"


class PasswordHasher:
    """Hash and verify passwords with a fixed bcrypt cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(
            _DUMMY_PASSWORD, bcrypt.gensalt(rounds=rounds)
        )

    def hash(self, password: str) -> str:
        """Hash a password. Returns a "$2b$..." string safe to store."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        A malformed or empty stored hash counts as a failed check.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the same bcrypt time as a real check, then fail.

        Login calls this for unknown emails so response time does not
        reveal whether an account exists.
        """
        bcrypt.checkpw(_encode(password), self._dummy_hash)
        return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]
