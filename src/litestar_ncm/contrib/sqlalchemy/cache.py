"""SQLAlchemy-backed cache store."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from litestar_ncm.cache import CacheEntry
from litestar_ncm.contrib.sqlalchemy.models import CacheEntryModel


class SQLAlchemyCache:
    """Cache backend storing JSON values in the ``ncm_cache`` table.

    Implements the CacheBackend protocol.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> CacheEntry | None:
        """Get a stored entry, expired or not."""
        async with self._session_factory() as session:
            row = await session.get(CacheEntryModel, key)
            if row is None:
                return None
            expires_at = row.expires_at
            # SQLite drops tzinfo on the way back
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=UTC)
            return CacheEntry(value=row.value, expires_at=expires_at)

    async def set(self, key: str, value: Any, expires_at: datetime) -> None:
        """Insert or replace the entry for ``key``."""
        async with self._session_factory() as session:
            await session.merge(
                CacheEntryModel(key=key, value=value, expires_at=expires_at)
            )
            await session.commit()
