"""Advisory consistency checks for the channel configuration and post overrides.

Nothing here is on the request path: these checks back the ``columnist check``
command and can be run from tests or a build step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from columnist.core.types import Post
from columnist.taxonomy.rules import Taxonomy

logger = logging.getLogger(__name__)

REQUIRED_CHANNEL_FIELDS = ("name", "description", "columns")
REQUIRED_COLUMN_FIELDS = ("name", "description", "tags")


@dataclass
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_posts: int = 0
    valid_posts: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ChannelSummary:
    key: str
    name: str
    column_count: int
    column_keys: list[str]


@dataclass(frozen=True)
class ConfigSummary:
    total_channels: int
    total_columns: int
    channels: list[ChannelSummary]


def validate_channels_config(config: Any) -> ValidationReport:
    """Check the raw nested-dict configuration for missing or mistyped fields."""
    report = ValidationReport()
    if not isinstance(config, Mapping):
        report.errors.append("Channels configuration must be a mapping")
        return report

    for channel_key, channel in config.items():
        if not isinstance(channel, Mapping):
            report.errors.append(f"Channel '{channel_key}' must be a mapping")
            continue
        report.errors.extend(
            f"Channel '{channel_key}' is missing required field: {name}"
            for name in REQUIRED_CHANNEL_FIELDS
            if not channel.get(name)
        )
        report.errors.extend(_text_field_errors(f"Channel '{channel_key}'", channel))

        columns = channel.get("columns")
        if not columns:
            continue
        if not isinstance(columns, Mapping):
            report.errors.append(f"Channel '{channel_key}' columns must be a mapping")
            continue
        for column_key, column in columns.items():
            label = f"Column '{channel_key}.{column_key}'"
            if not isinstance(column, Mapping):
                report.errors.append(f"{label} must be a mapping")
                continue
            report.errors.extend(
                f"{label} is missing required field: {name}" for name in REQUIRED_COLUMN_FIELDS if not column.get(name)
            )
            report.errors.extend(_text_field_errors(label, column))
            report.errors.extend(_tag_errors(label, column.get("tags")))

    return report


def _text_field_errors(label: str, body: Mapping[str, Any]) -> list[str]:
    return [
        f"{label} {name} must be a string"
        for name in ("name", "description")
        if body.get(name) and not isinstance(body[name], str)
    ]


def _tag_errors(label: str, tags: Any) -> list[str]:
    if not tags:
        return []
    if not isinstance(tags, list):
        return [f"{label} tags must be a list"]
    return [f"{label} tag at index {i} must be a string" for i, tag in enumerate(tags) if not isinstance(tag, str)]


def validate_post_classification(post: Post, taxonomy: Taxonomy) -> ValidationReport:
    """Check a post's explicit channel/column overrides against the taxonomy.

    Errors flag overrides that point nowhere. Warnings flag posts that will not
    show up in any channel or column view.
    """
    report = ValidationReport(total_posts=1)
    name = post.slug or "unknown post"

    if post.channel and not taxonomy.channel_exists(post.channel):
        report.errors.append(f"Post '{name}': channel '{post.channel}' does not exist")

    if post.column:
        if not post.channel:
            report.warnings.append(f"Post '{name}': column '{post.column}' specified without channel")
        elif taxonomy.channel_exists(post.channel) and not taxonomy.column_exists(post.channel, post.column):
            report.errors.append(f"Post '{name}': column '{post.column}' does not exist in channel '{post.channel}'")

    if not post.has_override:
        if not post.tags:
            report.warnings.append(f"Post '{name}': no classification method available (no channel/column or tags)")
        elif taxonomy.match_tags(post.tags) is None:
            report.warnings.append(f"Post '{name}': tags {post.tags} match no column")

    if report.is_valid:
        report.valid_posts = 1
    return report


def validate_posts_classification(posts: Iterable[Post], taxonomy: Taxonomy) -> ValidationReport:
    """Run :func:`validate_post_classification` over many posts and aggregate."""
    summary = ValidationReport()
    for post in posts:
        result = validate_post_classification(post, taxonomy)
        summary.total_posts += 1
        summary.valid_posts += result.valid_posts
        summary.errors.extend(result.errors)
        summary.warnings.extend(result.warnings)
    return summary


def config_summary(taxonomy: Taxonomy) -> ConfigSummary:
    channels = [
        ChannelSummary(
            key=channel.key,
            name=channel.name or "Unknown",
            column_count=len(channel.columns),
            column_keys=channel.column_keys,
        )
        for channel in taxonomy.channels()
    ]
    return ConfigSummary(
        total_channels=len(channels),
        total_columns=sum(c.column_count for c in channels),
        channels=channels,
    )


def log_config_report(config: Mapping[str, Any]) -> ValidationReport:
    """Validate ``config`` and log a summary plus any errors. Returns the report."""
    report = validate_channels_config(config)
    if report.is_valid:
        summary = config_summary(Taxonomy.from_config(config))
        logger.info(
            "Channels configuration: %d channels, %d columns",
            summary.total_channels,
            summary.total_columns,
        )
        for channel in summary.channels:
            logger.info("%s (%s): %s", channel.name, channel.key, ", ".join(channel.column_keys))
        logger.info("Channels configuration validation passed")
    else:
        for error in report.errors:
            logger.warning("Channels configuration: %s", error)
    return report
