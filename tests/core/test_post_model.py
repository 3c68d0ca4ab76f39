"""Tests for the Post model's frontmatter coercions."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from columnist.core.types import ColumnRef, Post, to_utc_datetime


def test_camel_case_frontmatter_keys_are_accepted():
    post = Post.model_validate(
        {
            "slug": "hello",
            "coverImage": "https://example.com/cover.png",
            "lastModified": "2024-02-01T10:00:00Z",
        }
    )

    assert post.cover_image == "https://example.com/cover.png"
    assert post.last_modified == datetime(2024, 2, 1, 10, 0, tzinfo=UTC)


def test_yaml_date_becomes_midnight_utc():
    post = Post(slug="a", date=date(2024, 1, 1))

    assert post.date == datetime(2024, 1, 1, tzinfo=UTC)


def test_naive_datetime_is_treated_as_utc():
    assert to_utc_datetime(datetime(2024, 1, 1, 12, 30)) == datetime(2024, 1, 1, 12, 30, tzinfo=UTC)


def test_aware_datetime_keeps_its_offset():
    tz = timezone(timedelta(hours=9))
    value = datetime(2024, 1, 1, 9, 0, tzinfo=tz)

    assert to_utc_datetime(value) is value


def test_iso_string_date():
    post = Post(slug="a", date="2023-06-01")

    assert post.date == datetime(2023, 6, 1, tzinfo=UTC)


def test_blank_date_is_none():
    assert Post(slug="a", date="").date is None


def test_unparseable_date_is_rejected():
    with pytest.raises(ValidationError):
        Post(slug="a", date="someday")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (["Go", "Rust"], ["Go", "Rust"]),
        ("Go", ["Go"]),
        (["Go", 3, None, "Rust"], ["Go", "Rust"]),
        (None, []),
        ({"Go": 1}, []),
    ],
)
def test_tags_are_normalized_to_a_list_of_strings(raw, expected):
    assert Post(slug="a", tags=raw).tags == expected


def test_pinned_defaults_to_false():
    assert Post(slug="a").pinned is False
    assert Post(slug="a", pinned=None).pinned is False
    assert Post(slug="a", pinned=True).pinned is True


def test_scalar_text_fields_become_strings():
    post = Post(slug="a", title=2024, channel=42)

    assert post.title == "2024"
    assert post.channel == "42"


def test_unknown_frontmatter_keys_are_kept():
    post = Post.model_validate({"slug": "a", "series": "intro"})

    assert post.series == "intro"


def test_post_is_frozen():
    post = Post(slug="a")

    with pytest.raises(ValidationError):
        post.title = "changed"


def test_has_override():
    assert Post(slug="a", channel="tech").has_override
    assert Post(slug="a", column="go").has_override
    assert not Post(slug="a", tags=["Go"]).has_override


def test_column_ref_compares_as_tuple():
    assert ColumnRef("tech", "go") == ("tech", "go")
