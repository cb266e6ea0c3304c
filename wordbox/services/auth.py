"""Session manager for JWT-based authentication.

Registers users, checks passwords, issues signed tokens and revokes them
on logout. All persistent state lives in the credential store; the manager
itself holds only configuration and is safe to share between requests.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import jwt
from jwt.exceptions import PyJWTError

from wordbox.core.config import Settings
from wordbox.services.errors import (
    InvalidArgumentError,
    InvalidCredentialsError,
    InvalidTokenError,
    StoreIOError,
    TokenBlacklistedError,
    TokenExpiredError,
    UserExistsError,
    UserNotFoundError,
)
from wordbox.services.password import Argon2PasswordHasher
from wordbox.services.store import CredentialStore, Tokener


class PasswordHasher(Protocol):
    """One-way password hashing with verification."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...


@dataclass(frozen=True)
class TokenConfig:
    """Signing key and lifetime for issued tokens."""

    key: bytes
    lifetime: timedelta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            key=settings.effective_jwt_secret_key.encode("utf-8"),
            lifetime=timedelta(minutes=settings.jwt_token_expire_minutes),
        )


@dataclass(frozen=True)
class User:
    """Identity carried by a valid token."""

    name: str


@dataclass(frozen=True)
class TokenClaims:
    """Token payload: the user name plus the registered JWT claims."""

    name: str
    sub: str
    exp: datetime
    iat: datetime
    jti: str

    @classmethod
    def for_user(cls, name: str, lifetime: timedelta) -> "TokenClaims":
        now = datetime.now(UTC)
        return cls(
            name=name,
            sub=name,
            exp=now + lifetime,
            iat=now,
            jti=secrets.token_hex(16),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "sub": self.sub,
            "exp": self.exp,
            "iat": self.iat,
            "jti": self.jti,
        }


class SessionManager:
    """Coordinates user registration, authentication and token lifecycle."""

    def __init__(
        self,
        store: CredentialStore,
        tokener: Tokener,
        *,
        hasher: PasswordHasher | None = None,
        algorithm: str = "HS256",
        logger: logging.Logger | None = None,
    ):
        self._store = store
        self._tokener = tokener
        self._hasher = hasher or Argon2PasswordHasher()
        self._algorithm = algorithm
        self._logger = logger or logging.getLogger(__name__)

    @property
    def token_lifetime(self) -> timedelta:
        return self._tokener.lifetime

    async def register(self, name: str, password: str) -> None:
        """Create a user; the password is stored only as a salted hash."""
        if not name or not password:
            raise InvalidArgumentError("name and password must be provided")

        if await self.exists(name):
            raise UserExistsError(f"user already exists: {name}")

        password_hash = self._hasher.hash(password)
        try:
            await self._store.save(name, password_hash)
        except Exception as e:
            # A concurrent register for the same name may have won the insert
            if await self.exists(name):
                raise UserExistsError(f"user already exists: {name}") from e
            raise StoreIOError(f"save: name {name}: {e}") from e
        self._logger.info("Registered user: %s", name)

    async def remove(self, name: str) -> None:
        """Delete an existing user."""
        if not await self.exists(name):
            raise UserNotFoundError(f"user doesn't exist: {name}")

        await self._remove(name)
        self._logger.info("Removed user: %s", name)

    async def exists(self, name: str) -> bool:
        """Check whether a user with this name is registered."""
        try:
            return await self._store.name_exists(name)
        except Exception as e:
            raise StoreIOError(f"name_exists: name {name}: {e}") from e

    async def authenticate(self, name: str, password: str) -> bool:
        """Check a password against the stored hash.

        A wrong password returns False; only a missing user or a failure is raised.
        """
        if not await self.exists(name):
            raise UserNotFoundError(f"user doesn't exist: {name}")

        password_hash = await self._load(name)
        if not password_hash:
            # Removed between the existence check and the load
            raise UserNotFoundError(f"user doesn't exist: {name}")
        return self._hasher.verify(password, password_hash)

    async def issue_token(self, name: str, password: str) -> str:
        """Authenticate and return a signed token for the user."""
        if not await self.authenticate(name, password):
            self._logger.warning("Invalid credentials for user: %s", name)
            raise InvalidCredentialsError("invalid credentials")

        claims = TokenClaims.for_user(name, self._tokener.lifetime)
        token = jwt.encode(claims.to_payload(), self._tokener.key, algorithm=self._algorithm)
        self._logger.info("Issued token for user: %s", name)
        return token

    async def validate_token(self, token: str) -> User:
        """Return the user a token belongs to.

        Signature, expiry and blacklist are checked in that order, so an
        expired token is reported as expired even when it was also revoked.
        """
        payload = self._decode(token)

        if await self._token_exists(token):
            raise TokenBlacklistedError("token has been revoked by logout")

        name = payload.get("name") or payload["sub"]
        return User(name=name)

    async def logout(self, token: str) -> User:
        """Validate a token and blacklist it for the rest of its lifetime."""
        user = await self.validate_token(token)
        if not await self._add_token(token):
            # Another logout of the same token got there first
            raise TokenBlacklistedError("token has been revoked by logout")
        self._logger.info("User logged out: %s", user.name)
        return user

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._tokener.key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("token has expired") from e
        except PyJWTError as e:
            raise InvalidTokenError(f"invalid token: {e}") from e

    # Store wrappers: every store failure surfaces as StoreIOError

    async def _load(self, name: str) -> str:
        try:
            return await self._store.load(name)
        except Exception as e:
            raise StoreIOError(f"load: name {name}: {e}") from e

    async def _remove(self, name: str) -> None:
        try:
            await self._store.remove(name)
        except Exception as e:
            raise StoreIOError(f"remove: name {name}: {e}") from e

    async def _add_token(self, token: str) -> bool:
        try:
            return await self._store.add_token(token)
        except Exception as e:
            raise StoreIOError(f"add_token: {e}") from e

    async def _token_exists(self, token: str) -> bool:
        try:
            return await self._store.token_exists(token)
        except Exception as e:
            raise StoreIOError(f"token_exists: {e}") from e
