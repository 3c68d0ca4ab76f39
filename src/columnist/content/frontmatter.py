"""Helpers for parsing YAML frontmatter from Markdown/MDX content."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from columnist.core.exceptions import FrontmatterError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def parse_frontmatter(content: str, *, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter using python-frontmatter.

    Args:
        content: Markdown content that may include frontmatter.
        source: Name used in error messages (usually the slug).

    Returns:
        Tuple of (metadata dict, body string). Content without a frontmatter
        block yields an empty dict and the full text as body.

    Raises:
        FrontmatterError: If the block is not valid YAML or is not a mapping.

    """
    try:
        parsed = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        raise FrontmatterError(source, str(exc)) from exc

    raw_metadata = parsed.metadata or {}
    if not isinstance(raw_metadata, dict):
        raise FrontmatterError(source, f"metadata is not a mapping ({type(raw_metadata).__name__})")

    body = parsed.content if isinstance(parsed.content, str) else str(parsed.content)
    return dict(raw_metadata), body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a Markdown file and parse its frontmatter.

    Raises:
        OSError: If the file cannot be read.
        FrontmatterError: If the metadata block cannot be parsed.

    """
    text = path.read_text(encoding=encoding)
    return parse_frontmatter(text, source=path.stem)
