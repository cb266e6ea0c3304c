"""Wordbox Database Configuration - Async SQLAlchemy."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def create_session_factory(
    database_url: str, *, echo: bool = False
) -> async_sessionmaker[AsyncSession]:
    """Create an engine and a reusable session factory for the given URL."""
    engine = create_async_engine(
        database_url,
        pool_pre_ping=True,  # Verify connection before use
        echo=echo,
    )
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all registered tables that do not exist yet."""
    # Importing the models registers them on Base.metadata
    from wordbox import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
