"""Argon2 password hashing."""

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from wordbox.services.errors import HashError


class Argon2PasswordHasher:
    """Salted one-way password hashing with Argon2id.

    Defaults: 64 MiB memory, 3 iterations, parallelism 4.
    """

    def __init__(
        self,
        *,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
        hash_len: int = 32,
        salt_len: int = 16,
    ):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=hash_len,
            salt_len=salt_len,
        )

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        try:
            return self._hasher.hash(password)
        except HashingError as e:
            raise HashError(f"Password hashing failed: {e}") from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash using constant-time comparison.

        A wrong password returns False; an unreadable stored hash raises HashError.
        """
        try:
            return self._hasher.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise HashError(f"Password verification failed: {e}") from e
