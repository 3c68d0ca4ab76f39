"""Low-level cache backend protocols and implementations."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol

import diskcache

from columnist.core.exceptions import CacheKeyNotFoundError

if TYPE_CHECKING:
    from pathlib import Path


class CacheEntry(NamedTuple):
    value: Any
    expires_at: float


class CacheBackend(Protocol):
    """Abstract protocol for cache backends.

    Backends only store entries; expiry is decided by the caller.
    """

    def get(self, key: str) -> CacheEntry: ...

    def set(self, key: str, entry: CacheEntry) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...

    def clear(self) -> None: ...

    def close(self) -> None: ...

    def __len__(self) -> int: ...


class MemoryCacheBackend:
    """Process-local dict backend. Values are kept by reference."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry:
        try:
            return self._entries[key]
        except KeyError as e:
            raise CacheKeyNotFoundError(key) from e

    def set(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class DiskCacheBackend:
    """Adapter for diskcache.Cache to match CacheBackend protocol.

    Entries are pickled, so cached values must be picklable and a hit returns
    an equal copy rather than the same object.
    """

    def __init__(self, directory: Path, **kwargs: Any) -> None:
        self._cache = diskcache.Cache(str(directory), **kwargs)

    def get(self, key: str) -> CacheEntry:
        try:
            return CacheEntry(*self._cache[key])
        except KeyError as e:
            raise CacheKeyNotFoundError(key) from e

    def set(self, key: str, entry: CacheEntry) -> None:
        self._cache.set(key, tuple(entry))

    def delete(self, key: str) -> None:
        with contextlib.suppress(KeyError):
            del self._cache[key]

    def keys(self) -> list[str]:
        return list(self._cache.iterkeys())

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()

    def __len__(self) -> int:
        return len(self._cache)
