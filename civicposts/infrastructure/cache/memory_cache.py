"""
In-process response cache.

A plain dict of (expires_at, value) entries. Concurrent writers may race;
entries are derived data and are rebuilt on the next miss.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional, Tuple

from civicposts.domain.ports.response_cache import IResponseCache

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 60_000


class InMemoryResponseCache(IResponseCache):
    """TTL map implementing the response cache port."""

    def __init__(self, default_ttl_ms: int = DEFAULT_TTL_MS, clock=time.monotonic):
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> None:
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms
        self._entries[key] = (self._clock() + ttl / 1000.0, value)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear_by_prefix(self, prefix: str) -> int:
        keys = [key for key in list(self._entries) if key.startswith(prefix)]
        for key in keys:
            self._entries.pop(key, None)
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """
        Drop expired entries.

        Returns:
            Number of dropped entries
        """
        now = self._clock()
        expired = [key for key, (expires_at, _) in list(self._entries.items()) if now >= expires_at]
        for key in expired:
            self._entries.pop(key, None)
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)


async def run_periodic_cleanup(cache: InMemoryResponseCache, interval_seconds: float) -> None:
    """Call ``cache.cleanup()`` every ``interval_seconds`` until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        dropped = cache.cleanup()
        if dropped:
            logger.debug(f"[Cache] cleanup dropped {dropped} expired entries")
