"""File-system content store for Markdown/MDX posts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from columnist.content.frontmatter import parse_frontmatter_file
from columnist.core.exceptions import FrontmatterError
from columnist.core.types import Post, PostDetail

logger = logging.getLogger(__name__)

# Checked in order; the first extension found for a slug wins.
CONTENT_EXTENSIONS: tuple[str, ...] = (".mdx", ".md")


class ContentStore:
    """Reads posts from a flat directory of ``<slug>.mdx`` / ``<slug>.md`` files.

    Nothing is cached here: every call reflects the directory as it is at call
    time. Memoization is layered on top by the query layer.
    """

    def __init__(self, content_dir: Path, extensions: tuple[str, ...] = CONTENT_EXTENSIONS) -> None:
        """Initialize the content store.

        Args:
            content_dir: Directory holding the post files
            extensions: Recognized extensions in priority order

        """
        self.content_dir = Path(content_dir)
        self.extensions = extensions

    def list_slugs(self) -> list[str]:
        """Return one slug per post file, sorted by file name.

        A missing content directory yields an empty list.
        """
        return list(self._post_files())

    def read_all(self) -> list[Post]:
        """Parse the metadata of every post, without bodies.

        A file that cannot be read or parsed is skipped with a warning so one
        corrupt post does not take down the whole listing.
        """
        posts: list[Post] = []
        for slug, path in self._post_files().items():
            try:
                metadata, _ = parse_frontmatter_file(path)
                posts.append(_build_post(slug, metadata))
            except (OSError, UnicodeDecodeError, FrontmatterError, ValidationError) as exc:
                logger.warning("Skipping post '%s' (%s): %s", slug, path.name, exc)
        return posts

    def read_one(self, slug: str) -> PostDetail | None:
        """Return the post named ``slug`` with its raw body, or None.

        None is returned when no file exists for any recognized extension, or
        when the file cannot be parsed.
        """
        path = self.resolve_path(slug)
        if path is None:
            logger.warning(
                "Post with slug '%s' not found in %s. Looked for %s.",
                slug,
                self.content_dir,
                ", ".join(self.extensions),
            )
            return None

        try:
            metadata, body = parse_frontmatter_file(path)
            post = _build_post(slug, metadata)
        except (OSError, UnicodeDecodeError, FrontmatterError, ValidationError):
            logger.exception("Error reading or parsing post with slug '%s'", slug)
            return None

        return PostDetail(slug=slug, frontmatter=post, content=body)

    def resolve_path(self, slug: str) -> Path | None:
        """Map a slug to its file, trying each extension in priority order."""
        if not slug or slug != Path(slug).name or slug in (".", ".."):
            return None
        for ext in self.extensions:
            candidate = self.content_dir / f"{slug}{ext}"
            if candidate.is_file():
                return candidate
        return None

    def _post_files(self) -> dict[str, Path]:
        """Map each slug to its preferred file, in file-name order."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory %s not found. Returning no posts.", self.content_dir)
            return {}

        priority = {ext: rank for rank, ext in enumerate(self.extensions)}
        chosen: dict[str, Path] = {}
        for path in sorted(self.content_dir.iterdir()):
            if not path.is_file() or path.suffix not in priority:
                continue
            current = chosen.get(path.stem)
            if current is None or priority[path.suffix] < priority[current.suffix]:
                chosen[path.stem] = path
        return dict(sorted(chosen.items()))


def _build_post(slug: str, metadata: dict[str, Any]) -> Post:
    # The file name is the identity; a 'slug' key in the frontmatter is ignored.
    fields = {str(key): value for key, value in metadata.items() if key != "slug"}
    return Post.model_validate({**fields, "slug": slug})
