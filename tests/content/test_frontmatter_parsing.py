from textwrap import dedent

import pytest

from columnist.content.frontmatter import parse_frontmatter
from columnist.core.exceptions import FrontmatterError


def test_parse_frontmatter_splits_metadata_and_body():
    content = dedent(
        """\
        ---
        title: Hello
        tags:
          - Go
          - golang
        pinned: true
        ---
        Body line.
        """
    )

    metadata, body = parse_frontmatter(content)

    assert metadata == {"title": "Hello", "tags": ["Go", "golang"], "pinned": True}
    assert body.strip() == "Body line."


def test_content_without_frontmatter():
    metadata, body = parse_frontmatter("Just markdown.")

    assert metadata == {}
    assert body == "Just markdown."


def test_invalid_yaml_raises_with_source():
    with pytest.raises(FrontmatterError) as excinfo:
        parse_frontmatter("---\ntitle: [oops\n---\nbody", source="my-post")

    assert excinfo.value.source == "my-post"
    assert "my-post" in str(excinfo.value)

