"""Channel/column resolution for posts."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from columnist.core.exceptions import TaxonomyConfigError
from columnist.core.types import Channel, Column, ColumnRef, Post
from columnist.taxonomy.channels import CHANNELS_CONFIG

logger = logging.getLogger(__name__)


class Taxonomy:
    """Immutable view over the channel configuration.

    A tag -> column index is built once at construction. Each tag points at
    the first column, in declaration order, that lists it, together with that
    column's position so multi-tag posts can still pick the earliest column.
    """

    def __init__(self, channels: Iterable[Channel]) -> None:
        self._channels: dict[str, Channel] = {}
        for channel in channels:
            if channel.key in self._channels:
                msg = f"Duplicate channel key '{channel.key}'"
                raise TaxonomyConfigError(msg)
            self._channels[channel.key] = channel
        self._tag_index = self._build_tag_index()

    @classmethod
    def from_config(cls, config: Mapping[str, Mapping[str, Any]] | None = None) -> Taxonomy:
        """Build a taxonomy from the nested dict configuration format."""
        raw = CHANNELS_CONFIG if config is None else config
        channels = []
        try:
            for channel_key, channel_body in raw.items():
                columns = {
                    column_key: {**column_body, "key": column_key}
                    for column_key, column_body in (channel_body.get("columns") or {}).items()
                }
                channels.append(Channel.model_validate({**channel_body, "key": channel_key, "columns": columns}))
        except (ValidationError, AttributeError, TypeError) as exc:
            msg = f"Invalid channels configuration: {exc}"
            raise TaxonomyConfigError(msg) from exc
        return cls(channels)

    def _build_tag_index(self) -> dict[str, tuple[int, ColumnRef]]:
        index: dict[str, tuple[int, ColumnRef]] = {}
        position = 0
        for channel in self._channels.values():
            for column in channel.columns.values():
                ref = ColumnRef(channel.key, column.key)
                for tag in column.tags:
                    index.setdefault(tag, (position, ref))
                position += 1
        return index

    # --- Lookups ---
    def channels(self) -> list[Channel]:
        return list(self._channels.values())

    def get_channel(self, channel_key: str) -> Channel | None:
        return self._channels.get(channel_key)

    def get_column(self, channel_key: str, column_key: str) -> Column | None:
        channel = self._channels.get(channel_key)
        if channel is None:
            return None
        return channel.columns.get(column_key)

    def channel_exists(self, channel_key: str | None) -> bool:
        return bool(channel_key) and channel_key in self._channels

    def column_exists(self, channel_key: str | None, column_key: str | None) -> bool:
        if not channel_key or not column_key:
            return False
        return self.get_column(channel_key, column_key) is not None

    def resolve_column_config(self, channel_key: str, column_key: str) -> tuple[Channel, Column] | None:
        """Return the channel and column configs for a route, or None if either is unknown."""
        channel = self._channels.get(channel_key)
        if channel is None:
            logger.warning("Channel '%s' does not exist", channel_key)
            return None
        column = channel.columns.get(column_key)
        if column is None:
            logger.warning("Column '%s' does not exist in channel '%s'", column_key, channel_key)
            return None
        return channel, column

    # --- Resolution ---
    def match_tags(self, tags: Iterable[str]) -> ColumnRef | None:
        """Return the earliest-declared column sharing a tag with ``tags``."""
        best: tuple[int, ColumnRef] | None = None
        for tag in tags:
            if not isinstance(tag, str):
                continue
            hit = self._tag_index.get(tag)
            if hit is not None and (best is None or hit[0] < best[0]):
                best = hit
        return best[1] if best is not None else None

    def resolve_channel(self, post: Post | Sequence[str]) -> str | None:
        """Return the channel key for a post (or bare tag list).

        An explicit ``channel`` naming a known channel wins over tag matching.
        """
        if isinstance(post, Post):
            if self.channel_exists(post.channel):
                return post.channel
            tags: Sequence[str] = post.tags
        else:
            tags = post
        match = self.match_tags(tags)
        return match.channel_key if match is not None else None

    def resolve_column(self, post: Post | Sequence[str]) -> ColumnRef | None:
        """Return the (channel, column) pair for a post (or bare tag list).

        An explicit ``channel`` + ``column`` pair that exists wins over tag
        matching.
        """
        if isinstance(post, Post):
            if self.column_exists(post.channel, post.column):
                return ColumnRef(post.channel, post.column)
            tags: Sequence[str] = post.tags
        else:
            tags = post
        return self.match_tags(tags)
