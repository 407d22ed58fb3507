# core/cache.py
"""
Caching utilities
"""
from typing import Any, Optional, Dict
from cachetools import TTLCache

from core.exceptions import CacheError

class CacheManager:
    """In-memory TTL cache for agent responses"""

    def __init__(self, max_size: int = 1000, ttl: int = 900):
        if max_size < 1 or ttl <= 0:
            raise CacheError(f"Invalid cache settings: max_size={max_size}, ttl={ttl}")
        self.ttl = ttl
        self._cache: Dict[str, Any] = TTLCache(maxsize=max_size, ttl=ttl)

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        return self._cache.get(key)

    async def set(self, key: str, value: Any) -> None:
        """Set value in cache; every entry shares the manager's TTL"""
        self._cache[key] = value

    async def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    async def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
