"""Get-or-compute caching for slow-changing NCM data."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "InMemoryCache",
    "cached",
]


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        return self.expires_at > now


@runtime_checkable
class CacheBackend(Protocol):
    """Key-value storage with explicit expiry timestamps."""

    async def get(self, key: str) -> CacheEntry | None:
        """Return the stored entry, expired or not, or None."""
        ...

    async def set(self, key: str, value: Any, expires_at: datetime) -> None:
        """Store ``value`` under ``key`` until ``expires_at``."""
        ...


class InMemoryCache:
    """Process-local cache backend."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    async def set(self, key: str, value: Any, expires_at: datetime) -> None:
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)


async def cached(
    backend: CacheBackend,
    key: str,
    ttl_seconds: int,
    compute: Callable[[], Awaitable[T]],
) -> T:
    """Return the cached value for ``key`` or compute and store it.

    Failures raised by ``compute`` propagate and nothing is stored.
    """
    now = datetime.now(tz=UTC)
    entry = await backend.get(key)
    if entry is not None and entry.is_fresh(now):
        logger.debug("Cache hit for %s", key)
        return entry.value

    value = await compute()
    await backend.set(key, value, now + timedelta(seconds=ttl_seconds))
    logger.debug("Cached %s for %d seconds", key, ttl_seconds)
    return value
