"""Columnist: content resolution for a channel/column organized blog."""

from columnist.query import PostQueries, build_queries

__version__ = "0.1.0"
__all__ = [
    "PostQueries",
    "build_queries",
]
