import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = ".columnist.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )
    content_dir: Path = Field(default=Path("content/blog"), description="Directory holding .md/.mdx posts")
    cache_dir: Path = Field(default=Path(".columnist/cache"), description="Disk cache directory")

    @property
    def abs_content_dir(self) -> Path:
        return self._resolve(self.content_dir)

    @property
    def abs_cache_dir(self) -> Path:
        return self._resolve(self.cache_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class CacheSettings(BaseModel):
    """Cache configuration. All TTLs are in seconds."""

    backend: Literal["memory", "disk"] = Field(default="memory", description="Where cache entries live")
    default_ttl: float = Field(default=5 * 60, gt=0)
    sorted_posts_ttl: float = Field(default=10 * 60, gt=0, description="Full sorted post list")
    filter_ttl: float = Field(default=8 * 60, gt=0, description="Channel and column filters")
    post_detail_ttl: float = Field(default=15 * 60, gt=0, description="Single post lookups")
    sweep_interval: float = Field(default=60, gt=0, description="Seconds between expired-entry sweeps")


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file: Path | None = None


class ColumnistConfig(BaseSettings):
    """Root configuration for columnist.

    Supports environment variable overrides with the pattern:
    COLUMNIST_SECTION__KEY (e.g., COLUMNIST_CACHE__BACKEND)
    """

    paths: PathsSettings = Field(default_factory=PathsSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="COLUMNIST_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "ColumnistConfig":
        """Loads configuration from .columnist.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (COLUMNIST_SECTION__KEY)
        2. Config file (.columnist.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        env_settings = cls().model_dump(exclude_unset=True)
        merged_config = _deep_merge(file_settings, env_settings)
        merged_config.setdefault("paths", {})["site_root"] = root_path

        return cls.model_validate(merged_config)
