"""Credential store backed by async SQLAlchemy."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wordbox.models.token_blacklist import BlacklistedToken
from wordbox.models.user_credential import UserCredential
from wordbox.services.store import StoreError

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_INSERT_BY_DIALECT = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class SqlAlchemyStore:
    """Credential store over the user_credentials and token_blacklist tables.

    Each call runs in its own session and transaction. Any SQLAlchemy
    failure is re-raised as StoreError. Supports SQLite and PostgreSQL,
    which both provide the conflict-ignoring insert used by add_token.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        engine = session_factory.kw["bind"]
        try:
            self._insert = _INSERT_BY_DIALECT[engine.dialect.name]
        except KeyError:
            raise StoreError(f"unsupported database dialect: {engine.dialect.name}") from None

    async def load(self, name: str) -> str:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(UserCredential.password_hash).where(UserCredential.name == name)
                )
                return result.scalar_one_or_none() or ""
        except SQLAlchemyError as e:
            raise StoreError(f"load {name!r}: {e}") from e

    async def save(self, name: str, data: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.merge(UserCredential(name=name, password_hash=data))
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"save {name!r}: {e}") from e

    async def name_exists(self, name: str) -> bool:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(UserCredential.name).where(UserCredential.name == name)
                )
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise StoreError(f"name_exists {name!r}: {e}") from e

    async def remove(self, name: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(UserCredential).where(UserCredential.name == name))
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"remove {name!r}: {e}") from e

    async def add_token(self, token: str) -> bool:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    self._insert(BlacklistedToken)
                    .values(token=token)
                    .on_conflict_do_nothing(index_elements=[BlacklistedToken.token])
                )
                await session.commit()
                return result.rowcount == 1
        except SQLAlchemyError as e:
            raise StoreError(f"add_token: {e}") from e

    async def token_exists(self, token: str) -> bool:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(BlacklistedToken.token).where(BlacklistedToken.token == token)
                )
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise StoreError(f"token_exists: {e}") from e

    async def remove_token(self, token: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(
                    delete(BlacklistedToken).where(BlacklistedToken.token == token)
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"remove_token: {e}") from e

    async def close(self) -> None:
        """Dispose of the underlying engine."""
        engine = self._session_factory.kw.get("bind")
        if engine is not None:
            await engine.dispose()
            logger.debug("Credential store engine disposed")
