"""Core data types for columnist."""

from datetime import UTC, date, datetime
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

TEXT_FIELDS = ("title", "excerpt", "author", "cover_image", "channel", "column")


def to_utc_datetime(value: Any) -> Any:
    """Coerce frontmatter date values into aware datetimes.

    YAML hands us ``date``/``datetime`` objects for unquoted values and plain
    strings for quoted ones. Naive values are interpreted as UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ColumnRef(NamedTuple):
    """A resolved (channel, column) pair."""

    channel_key: str
    column_key: str


# --- Content Domain ---
class Post(BaseModel):
    """Metadata of one content file.

    Field names follow Python conventions; the camelCase keys used in
    frontmatter (``coverImage``, ``lastModified``) are accepted as aliases.
    Frontmatter keys without a dedicated field are kept as extra attributes.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    slug: str
    title: str = ""
    date: datetime | None = None
    excerpt: str | None = None
    author: str | None = None
    cover_image: str | None = Field(default=None, alias="coverImage")
    tags: list[str] = Field(default_factory=list)
    pinned: bool = False
    channel: str | None = None
    column: str | None = None
    last_modified: datetime | None = Field(default=None, alias="lastModified")

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _scalar_to_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float, date)):
            return str(value)
        return value

    @field_validator("date", "last_modified", mode="before")
    @classmethod
    def _normalize_datetime(cls, value: Any) -> Any:
        return to_utc_datetime(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [tag for tag in value if isinstance(tag, str)]
        return []

    @field_validator("pinned", mode="before")
    @classmethod
    def _none_is_unpinned(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def has_override(self) -> bool:
        return bool(self.channel or self.column)


class PostDetail(BaseModel):
    """A single post with its raw body, as returned by single-post retrieval."""

    model_config = ConfigDict(frozen=True)

    slug: str
    frontmatter: Post
    content: str


# --- Taxonomy Domain ---
class Column(BaseModel):
    """A sub-category of a channel, matched through its tags."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    tags: list[str] = Field(default_factory=list)
    cover: str | None = None


class Channel(BaseModel):
    """A top-level content category holding columns in declaration order."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    icon: str | None = None
    columns: dict[str, Column] = Field(default_factory=dict)

    @property
    def column_keys(self) -> list[str]:
        return list(self.columns)
