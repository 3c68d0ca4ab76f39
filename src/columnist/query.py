"""Read-only post views: sorted, per channel, per column, tags.

These are the functions page generation depends on. Every view is derived
from the content store at call time and memoized through the injected
:class:`TTLCache`; nothing here writes back to the content directory.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from columnist.cache import CacheSweeper, DiskCacheBackend, TTLCache
from columnist.content import ContentStore
from columnist.core.config import CacheSettings, ColumnistConfig
from columnist.taxonomy import Taxonomy

if TYPE_CHECKING:
    from columnist.core.types import Post, PostDetail

logger = logging.getLogger(__name__)

SORTED_POSTS = "sorted-posts"
POSTS_BY_CHANNEL = "posts-by-channel"
POSTS_BY_COLUMN = "posts-by-column"
POST_DETAIL = "post-detail"
CACHE_TYPES = (SORTED_POSTS, POSTS_BY_CHANNEL, POSTS_BY_COLUMN, POST_DETAIL)


def _sort_key(post: Post) -> tuple[bool, bool, float]:
    # Pinned first, then newest first; undated posts trail their group.
    timestamp = post.date.timestamp() if post.date is not None else 0.0
    return (not post.pinned, post.date is None, -timestamp)


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    """Order posts pinned-first, then by descending date. The sort is stable."""
    return sorted(posts, key=_sort_key)


class PostQueries:
    """The query layer over one content store.

    Use one cache per query layer: cache keys are built from the query name
    and its arguments only.

    The query layer owns its cache and, when given one, the sweeper that
    expires entries in the background. Use it as a context manager (or call
    :meth:`start` and :meth:`close`) to run and release both.
    """

    def __init__(
        self,
        store: ContentStore,
        taxonomy: Taxonomy,
        cache: TTLCache,
        settings: CacheSettings | None = None,
        sweeper: CacheSweeper | None = None,
    ) -> None:
        self.store = store
        self.taxonomy = taxonomy
        self.cache = cache
        self.sweeper = sweeper
        settings = settings or CacheSettings()

        self._sorted = cache.wrap(self._load_sorted, SORTED_POSTS, settings.sorted_posts_ttl)
        self._by_channel = cache.wrap(self._filter_by_channel, POSTS_BY_CHANNEL, settings.filter_ttl)
        self._by_column = cache.wrap(self._filter_by_column, POSTS_BY_COLUMN, settings.filter_ttl)
        self._detail = cache.wrap(store.read_one, POST_DETAIL, settings.post_detail_ttl)

    # --- Uncached computations ---
    def _load_sorted(self) -> list[Post]:
        return sort_posts(self.store.read_all())

    def _filter_by_channel(self, channel_key: str | None) -> list[Post]:
        posts = self.all_posts_sorted()
        if not channel_key:
            return posts
        return [post for post in posts if self.taxonomy.resolve_channel(post) == channel_key]

    def _filter_by_column(self, channel_key: str | None, column_key: str | None) -> list[Post]:
        posts = self.all_posts_sorted()
        if not channel_key or not column_key:
            return posts
        return [post for post in posts if self.taxonomy.resolve_column(post) == (channel_key, column_key)]

    # --- Public views ---
    def all_posts_sorted(self) -> list[Post]:
        """Every post, pinned posts first, then newest first."""
        return self._sorted()

    def posts_by_channel(self, channel_key: str | None) -> list[Post]:
        """Posts resolved to ``channel_key``; a falsy key returns every post."""
        # Falsy keys share the "" entry so None never collides with the key "None".
        return self._by_channel(channel_key or "")

    def posts_by_column(self, channel_key: str | None, column_key: str | None) -> list[Post]:
        """Posts resolved to exactly this column; a falsy key returns every post."""
        if not channel_key or not column_key:
            return self._by_column("", "")
        return self._by_column(channel_key, column_key)

    def unique_tags(self) -> list[str]:
        """Sorted set of trimmed tags across all posts. Case is preserved."""
        tags = {tag.strip() for post in self.all_posts_sorted() for tag in post.tags}
        tags.discard("")
        return sorted(tags)

    def read_one(self, slug: str) -> PostDetail | None:
        return self._detail(slug)

    def list_slugs(self) -> list[str]:
        return self.store.list_slugs()

    # --- Static route parameters ---
    def column_route_params(self, channel_key: str) -> list[str]:
        """Column keys of a channel, or an empty list for an unknown channel."""
        channel = self.taxonomy.get_channel(channel_key)
        return channel.column_keys if channel is not None else []

    def post_route_params(self, channel_key: str) -> list[tuple[str, str]]:
        """``(column_key, post_slug)`` for every post of every column of a channel."""
        return [
            (column_key, post.slug)
            for column_key in self.column_route_params(channel_key)
            for post in self.posts_by_column(channel_key, column_key)
        ]

    def refresh(self) -> None:
        """Drop every cached view so the next call re-reads the content directory."""
        for cache_type in CACHE_TYPES:
            self.cache.invalidate_type(cache_type)

    # --- Lifecycle ---
    def start(self) -> None:
        if self.sweeper is not None:
            self.sweeper.start()

    def close(self) -> None:
        """Stop the sweeper and release the cache backend."""
        if self.sweeper is not None:
            self.sweeper.stop()
        self.cache.close()

    def __enter__(self) -> PostQueries:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def disk_cache_dir(config: ColumnistConfig) -> Path:
    """Disk cache directory for the configured content directory.

    Each content directory gets its own subdirectory, so a persisted cache
    never serves posts read from a previously configured location.
    """
    content_dir = str(config.paths.abs_content_dir.resolve())
    namespace = hashlib.sha256(content_dir.encode("utf-8")).hexdigest()[:16]
    return config.paths.abs_cache_dir / namespace


def build_cache(config: ColumnistConfig) -> TTLCache:
    backend = None
    if config.cache.backend == "disk":
        directory = disk_cache_dir(config)
        backend = DiskCacheBackend(directory)
        logger.debug("Using disk cache at %s", directory)
    return TTLCache(backend=backend, default_ttl=config.cache.default_ttl)


def build_queries(config: ColumnistConfig | None = None, taxonomy: Taxonomy | None = None) -> PostQueries:
    """Wire a query layer from configuration.

    The returned object is not started; enter it as a context manager to run
    its cache sweeper and release the cache on exit.
    """
    config = config or ColumnistConfig.load()
    cache = build_cache(config)
    return PostQueries(
        store=ContentStore(config.paths.abs_content_dir),
        taxonomy=taxonomy or Taxonomy.from_config(),
        cache=cache,
        settings=config.cache,
        sweeper=CacheSweeper(cache, interval=config.cache.sweep_interval),
    )
