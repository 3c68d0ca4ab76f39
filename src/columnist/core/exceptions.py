"""Core exceptions for columnist."""


class ColumnistError(Exception):
    """Base exception for all columnist errors."""


class FrontmatterError(ColumnistError):
    """Raised when a content file's metadata block cannot be parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid frontmatter in '{source}': {reason}")


class TaxonomyConfigError(ColumnistError):
    """Raised when the channels configuration cannot be turned into a taxonomy."""


class InvalidCacheTypeError(ColumnistError, ValueError):
    """Raised when a cache type cannot be used to build cache keys."""

    def __init__(self, cache_type: object) -> None:
        self.cache_type = cache_type
        super().__init__(f"Cache type must be a non-empty string without ':', got {cache_type!r}")


class CacheKeyNotFoundError(ColumnistError):
    """Raised when a key is not found in a cache backend."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Key not found in cache: '{key}'")
