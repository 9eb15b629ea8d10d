"""Async engine, sessionmaker, and schema helpers for the billing database."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from frontdesk.core.config import get_settings
from frontdesk.db.base import Base

_engines: dict[str, AsyncEngine] = {}
_sessionmakers: dict[str, async_sessionmaker[AsyncSession]] = {}


def _url_or_default(database_url: str | None) -> str:
    return database_url or get_settings().database_url


def get_engine(database_url: str | None = None) -> AsyncEngine:
    """Return the cached engine for ``database_url`` (or the configured URL)."""
    url = _url_or_default(database_url)
    engine = _engines.get(url)
    if engine is None:
        engine = create_async_engine(url, echo=False, future=True)
        _engines[url] = engine
    return engine


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return the cached async sessionmaker bound to ``database_url``."""
    url = _url_or_default(database_url)
    factory = _sessionmakers.get(url)
    if factory is None:
        factory = async_sessionmaker(
            get_engine(url), expire_on_commit=False, class_=AsyncSession
        )
        _sessionmakers[url] = factory
    return factory


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session from the configured sessionmaker."""
    async with get_sessionmaker()() as session:
        yield session


async def create_schema(database_url: str | None = None, *, drop: bool = False) -> None:
    """Create all ORM tables, optionally dropping them first."""
    import frontdesk.models  # noqa: F401  registers mappers on Base.metadata

    engine = get_engine(database_url)
    async with engine.begin() as connection:
        if drop:
            await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)


async def dispose_engine(database_url: str | None = None) -> None:
    """Dispose and forget the cached engine for ``database_url``."""
    url = _url_or_default(database_url)
    _sessionmakers.pop(url, None)
    engine = _engines.pop(url, None)
    if engine is not None:
        await engine.dispose()
