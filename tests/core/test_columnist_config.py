"""Tests for ColumnistConfig loading precedence."""

from pathlib import Path

import pytest

from columnist.core.config import ColumnistConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("COLUMNIST_CACHE__BACKEND", "COLUMNIST_CACHE__FILTER_TTL", "COLUMNIST_PATHS__CONTENT_DIR"):
        monkeypatch.delenv(var, raising=False)


def test_defaults(tmp_path: Path):
    config = ColumnistConfig.load(tmp_path)

    assert config.paths.site_root == tmp_path
    assert config.paths.abs_content_dir == tmp_path / "content" / "blog"
    assert config.cache.backend == "memory"
    assert config.cache.default_ttl == 300
    assert config.cache.sorted_posts_ttl == 600
    assert config.cache.filter_ttl == 480
    assert config.cache.post_detail_ttl == 900


def test_toml_file_overrides_defaults(tmp_path: Path):
    (tmp_path / ".columnist.toml").write_text(
        '[paths]\ncontent_dir = "posts"\n\n[cache]\nbackend = "disk"\nfilter_ttl = 30\n',
        encoding="utf-8",
    )

    config = ColumnistConfig.load(tmp_path)

    assert config.paths.abs_content_dir == tmp_path / "posts"
    assert config.cache.backend == "disk"
    assert config.cache.filter_ttl == 30
    assert config.cache.sorted_posts_ttl == 600


def test_environment_beats_toml(tmp_path: Path, monkeypatch):
    (tmp_path / ".columnist.toml").write_text("[cache]\nfilter_ttl = 30\n", encoding="utf-8")
    monkeypatch.setenv("COLUMNIST_CACHE__FILTER_TTL", "45")

    config = ColumnistConfig.load(tmp_path)

    assert config.cache.filter_ttl == 45


def test_absolute_content_dir_is_not_rebased(tmp_path: Path):
    elsewhere = tmp_path / "elsewhere"
    (tmp_path / ".columnist.toml").write_text(f'[paths]\ncontent_dir = "{elsewhere.as_posix()}"\n', encoding="utf-8")

    config = ColumnistConfig.load(tmp_path)

    assert config.paths.abs_content_dir == elsewhere
