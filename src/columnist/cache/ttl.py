"""Time-based memoization for query functions."""

from __future__ import annotations

import functools
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ParamSpec, TypeVar

from columnist.cache.backends import CacheBackend, CacheEntry, MemoryCacheBackend
from columnist.core.exceptions import CacheKeyNotFoundError, InvalidCacheTypeError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

DEFAULT_TTL = 5 * 60  # seconds
KEY_SEPARATOR = ":"


def _check_cache_type(cache_type: Any) -> str:
    if not isinstance(cache_type, str) or not cache_type or KEY_SEPARATOR in cache_type:
        raise InvalidCacheTypeError(cache_type)
    return cache_type


def make_cache_key(cache_type: str, *args: Any, **kwargs: Any) -> str:
    """Build ``type:arg1:arg2[:name=value...]`` from a call's arguments.

    Keys are positional: ``f(a, b)`` and ``f(b, a)`` are different entries,
    and arguments are compared by their ``str()`` form, not by identity.
    The separator after ``type`` is always present, so a call without
    arguments is stored as ``type:``.
    """
    parts = [str(arg) for arg in args]
    parts.extend(f"{name}={kwargs[name]}" for name in sorted(kwargs))
    return _check_cache_type(cache_type) + KEY_SEPARATOR + KEY_SEPARATOR.join(parts)


@dataclass(frozen=True)
class CacheStats:
    size: int
    keys: list[str]
    hits: int
    misses: int


class TTLCache:
    """Key/value cache whose entries expire ``ttl`` seconds after being stored.

    Expired entries are treated as absent on read, so :meth:`sweep_expired`
    only reclaims space. All access goes through one re-entrant lock; a
    wrapped call holds it from lookup to store so two threads never compute
    the same key at once, and wrapped functions may call each other.
    """

    def __init__(
        self,
        backend: CacheBackend | None = None,
        default_ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            backend: Entry storage; defaults to an in-memory dict
            default_ttl: Seconds an entry lives when no ttl is given
            clock: Returns the current time in seconds

        """
        self.backend: CacheBackend = backend if backend is not None else MemoryCacheBackend()
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    # --- Entries ---
    def _lookup(self, key: str) -> tuple[bool, Any]:
        try:
            entry = self.backend.get(key)
        except CacheKeyNotFoundError:
            return False, None
        if self._clock() >= entry.expires_at:
            self.backend.delete(key)
            return False, None
        return True, entry.value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value stored under ``key`` or ``default``."""
        with self._lock:
            found, value = self._lookup(key)
        return value if found else default

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        lifetime = self.default_ttl if ttl is None else ttl
        with self._lock:
            self.backend.set(key, CacheEntry(value, self._clock() + lifetime))

    def delete(self, key: str) -> None:
        with self._lock:
            self.backend.delete(key)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            found, _ = self._lookup(key)
        return found

    # --- Memoization ---
    def wrap(self, fn: Callable[P, R], cache_type: str, ttl: float | None = None) -> Callable[P, R]:
        """Return ``fn`` memoized under keys built from ``cache_type`` and its arguments.

        A call that raises stores nothing and the exception reaches the caller.
        """
        _check_cache_type(cache_type)

        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            key = make_cache_key(cache_type, *args, **kwargs)
            with self._lock:
                found, value = self._lookup(key)
                if found:
                    self._hits += 1
                    logger.debug("Cache hit: %s", key)
                    return value
                self._misses += 1
                result = fn(*args, **kwargs)
                self.set(key, result, ttl)
                logger.debug("Cache miss, stored: %s", key)
                return result

        return wrapper

    def cached(self, cache_type: str, ttl: float | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """Decorator form of :meth:`wrap`."""

        def decorator(fn: Callable[P, R]) -> Callable[P, R]:
            return self.wrap(fn, cache_type, ttl)

        return decorator

    # --- Invalidation ---
    def invalidate_type(self, cache_type: str) -> int:
        """Remove every entry created for ``cache_type``. Returns how many were removed."""
        prefix = _check_cache_type(cache_type) + KEY_SEPARATOR
        with self._lock:
            doomed = [key for key in self.backend.keys() if key.startswith(prefix)]
            for key in doomed:
                self.backend.delete(key)
        logger.debug("Cleared %d cache entries for type: %s", len(doomed), cache_type)
        return len(doomed)

    def invalidate_all(self) -> None:
        with self._lock:
            self.backend.clear()
        logger.debug("Cleared all cache entries")

    def sweep_expired(self) -> int:
        """Drop entries past their expiry. Returns how many were removed."""
        removed = 0
        with self._lock:
            now = self._clock()
            for key in self.backend.keys():
                try:
                    entry = self.backend.get(key)
                except CacheKeyNotFoundError:
                    continue
                if now >= entry.expires_at:
                    self.backend.delete(key)
                    removed += 1
        return removed

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self.backend),
                keys=self.backend.keys(),
                hits=self._hits,
                misses=self._misses,
            )

    def close(self) -> None:
        """Release underlying cache resources."""
        with self._lock:
            self.backend.close()


class CacheSweeper:
    """Background thread that calls :meth:`TTLCache.sweep_expired` periodically."""

    def __init__(self, cache: TTLCache, interval: float = 60.0) -> None:
        self.cache = cache
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="columnist-cache-sweeper", daemon=True)
        self._thread.start()
        logger.debug("Cache sweeper started (interval=%ss)", self.interval)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        logger.debug("Cache sweeper stopped")

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            removed = self.cache.sweep_expired()
            if removed:
                logger.debug("Swept %d expired cache entries", removed)

    def __enter__(self) -> CacheSweeper:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
