"""Credential store contract and the in-memory reference store.

A store persists user password hashes and the blacklist of revoked tokens.
It holds no business rules: presence checks, overwrite protection and error
classification all live in the session manager. Store methods raise only on
IO failure, never to signal absence.
"""

import threading
from datetime import timedelta
from typing import Protocol


class StoreError(Exception):
    """Raised by store implementations when the backend fails."""


class CredentialStore(Protocol):
    """Persistence for user hashes and the token blacklist.

    Implementations must be safe for concurrent use.
    """

    async def load(self, name: str) -> str:
        """Return the stored password hash for name ("" when absent)."""

    async def save(self, name: str, data: str) -> None:
        """Store data under name, overwriting any existing value."""

    async def name_exists(self, name: str) -> bool:
        """Return True when a user with this name is stored."""

    async def remove(self, name: str) -> None:
        """Delete the user; a no-op when the user does not exist."""

    async def add_token(self, token: str) -> bool:
        """Add a token to the blacklist atomically.

        Return False when the token was already blacklisted, so that exactly
        one of several concurrent callers sees True.
        """

    async def token_exists(self, token: str) -> bool:
        """Return True when the token is blacklisted."""

    async def remove_token(self, token: str) -> None:
        """Remove a token from the blacklist; a no-op when absent."""


class Tokener(Protocol):
    """Source of the signing key and lifetime for issued tokens."""

    @property
    def key(self) -> bytes: ...

    @property
    def lifetime(self) -> timedelta: ...


class MemoryStore:
    """Process-local credential store backed by two dicts.

    One lock guards both maps. Methods are async to satisfy the store
    contract but never suspend, so a check followed by a write from the
    same event loop cannot interleave with another coroutine.
    """

    def __init__(
        self,
        users: dict[str, str] | None = None,
        blacklist: set[str] | None = None,
    ):
        self._users: dict[str, str] = dict(users or {})
        self._blacklist: set[str] = set(blacklist or ())
        self._lock = threading.Lock()

    async def load(self, name: str) -> str:
        with self._lock:
            return self._users.get(name, "")

    async def save(self, name: str, data: str) -> None:
        with self._lock:
            self._users[name] = data

    async def name_exists(self, name: str) -> bool:
        with self._lock:
            return name in self._users

    async def remove(self, name: str) -> None:
        with self._lock:
            self._users.pop(name, None)

    async def add_token(self, token: str) -> bool:
        with self._lock:
            if token in self._blacklist:
                return False
            self._blacklist.add(token)
            return True

    async def token_exists(self, token: str) -> bool:
        with self._lock:
            return token in self._blacklist

    async def remove_token(self, token: str) -> None:
        with self._lock:
            self._blacklist.discard(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
