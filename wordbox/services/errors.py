"""Error taxonomy for the session manager.

Every failure carries a ``kind`` so callers can branch on the category
instead of matching message strings. Underlying store or hashing errors
are chained as ``__cause__``.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Categories of session manager failures."""

    INVALID_ARGUMENT = "invalid_argument"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    EXPIRED = "expired"
    BLACKLISTED = "blacklisted"
    IO_ERROR = "io_error"
    HASH_ERROR = "hash_error"


class AuthError(Exception):
    """Base authentication error."""

    kind: ErrorKind

    @property
    def cause(self) -> BaseException | None:
        """The wrapped lower-level exception, if any."""
        return self.__cause__


class InvalidArgumentError(AuthError):
    """Name or password missing."""

    kind = ErrorKind.INVALID_ARGUMENT


class UserExistsError(AuthError):
    """A user with this name is already registered."""

    kind = ErrorKind.ALREADY_EXISTS


class UserNotFoundError(AuthError):
    """No user with this name is registered."""

    kind = ErrorKind.NOT_FOUND


class InvalidCredentialsError(AuthError):
    """Wrong password for an existing user."""

    kind = ErrorKind.INVALID_CREDENTIALS


class TokenError(AuthError):
    """JWT token error."""

    kind = ErrorKind.INVALID_TOKEN


class InvalidTokenError(TokenError):
    """JWT token is malformed or its signature does not verify."""

    kind = ErrorKind.INVALID_TOKEN


class TokenExpiredError(TokenError):
    """JWT token is well-formed and signed but past its expiry."""

    kind = ErrorKind.EXPIRED


class TokenBlacklistedError(TokenError):
    """JWT token was revoked by logout."""

    kind = ErrorKind.BLACKLISTED


class StoreIOError(AuthError):
    """The credential store failed."""

    kind = ErrorKind.IO_ERROR


class HashError(AuthError):
    """The password hashing primitive failed."""

    kind = ErrorKind.HASH_ERROR
