"""Columnist caching subsystem.

Key Components:
- `TTLCache`: memoization with expiry and per-type invalidation.
- `CacheSweeper`: periodic removal of expired entries.
- `CacheBackend`: protocol for entry storage.
- `MemoryCacheBackend` / `DiskCacheBackend`: in-process and diskcache storage.
"""

from columnist.cache.backends import CacheBackend, CacheEntry, DiskCacheBackend, MemoryCacheBackend
from columnist.cache.ttl import DEFAULT_TTL, CacheStats, CacheSweeper, TTLCache, make_cache_key

__all__ = [
    "DEFAULT_TTL",
    "CacheBackend",
    "CacheEntry",
    "CacheStats",
    "CacheSweeper",
    "DiskCacheBackend",
    "MemoryCacheBackend",
    "TTLCache",
    "make_cache_key",
]
