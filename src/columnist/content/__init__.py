"""Content store: enumerate and parse post files."""

from columnist.content.store import CONTENT_EXTENSIONS, ContentStore

__all__ = ["CONTENT_EXTENSIONS", "ContentStore"]
