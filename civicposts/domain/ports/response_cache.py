"""
Port: IResponseCache

Key/value cache for derived query results, with per-entry TTL.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IResponseCache(ABC):
    """Response cache. Entries are pure derived data, so lost updates are harmless."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None when missing or expired."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def clear_by_prefix(self, prefix: str) -> int:
        """
        Drop every entry whose key starts with ``prefix``.

        Returns:
            Number of dropped entries
        """
        pass
