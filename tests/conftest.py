from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from columnist.cache import TTLCache
from columnist.content import ContentStore
from columnist.query import PostQueries
from columnist.taxonomy import Taxonomy

TEST_CHANNELS: dict[str, dict[str, Any]] = {
    "tech": {
        "name": "Tech",
        "description": "Engineering notes",
        "icon": "/tech.svg",
        "columns": {
            "go": {"name": "Go", "description": "Go articles", "tags": ["Go", "golang"]},
            "general": {"name": "General", "description": "Everything else", "tags": ["programming", "tech"]},
        },
    },
    "life": {
        "name": "Life",
        "description": "Travel and thoughts",
        "icon": "/life.svg",
        "columns": {
            "japan": {"name": "Japan", "description": "Travel logs", "tags": ["japan", "travel"]},
            "thoughts": {"name": "Thoughts", "description": "Retrospectives", "tags": ["thoughts", "programming"]},
        },
    },
}


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content" / "blog"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_post(content_dir: Path):
    """Write ``<name>`` into the content directory with YAML frontmatter."""

    def _write(name: str, metadata: dict[str, Any] | str | None = None, body: str = "Body text.\n") -> Path:
        path = content_dir / name
        if metadata is None:
            path.write_text(body, encoding="utf-8")
        else:
            header = metadata if isinstance(metadata, str) else yaml.safe_dump(metadata, allow_unicode=True)
            path.write_text(f"---\n{header}---\n{body}", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def channels_config() -> dict[str, dict[str, Any]]:
    return TEST_CHANNELS


@pytest.fixture
def taxonomy(channels_config) -> Taxonomy:
    return Taxonomy.from_config(channels_config)


@pytest.fixture
def store(content_dir: Path) -> ContentStore:
    return ContentStore(content_dir)


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(clock=clock)


@pytest.fixture
def queries(store: ContentStore, taxonomy: Taxonomy, cache: TTLCache) -> PostQueries:
    return PostQueries(store, taxonomy, cache)
