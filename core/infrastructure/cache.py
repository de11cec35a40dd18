"""
Cache abstraction (port).

Application services depend on this interface rather than on the
Django cache framework directly.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional


class CachePort(ABC):
    """
    Abstract cache port.

    Implementations must treat backend failures as cache misses.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for the backend default)
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a value from cache.

        Args:
            key: Cache key
        """

    @abstractmethod
    async def delete_many(self, keys: Iterable[str]) -> None:
        """
        Delete several values at once.

        Args:
            keys: Cache keys
        """
