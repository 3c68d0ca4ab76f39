"""Tests for the advisory configuration and classification checks."""

import logging

from columnist.core.types import Post
from columnist.taxonomy import CHANNELS_CONFIG
from columnist.taxonomy.validation import (
    config_summary,
    log_config_report,
    validate_channels_config,
    validate_post_classification,
    validate_posts_classification,
)


def test_shipped_configuration_is_valid():
    report = validate_channels_config(CHANNELS_CONFIG)

    assert report.is_valid, report.errors


def test_non_mapping_configuration():
    report = validate_channels_config(["tech"])

    assert not report.is_valid
    assert report.errors == ["Channels configuration must be a mapping"]


def test_missing_and_mistyped_fields_are_reported():
    config = {
        "tech": {
            "name": 42,
            "columns": {
                "go": {"name": "Go", "description": "Go", "tags": ["Go", 7]},
                "bad": {"name": "Bad", "tags": "Go"},
            },
        },
        "empty": {"name": "Empty", "description": "No columns"},
    }

    errors = validate_channels_config(config).errors

    assert "Channel 'tech' is missing required field: description" in errors
    assert "Channel 'tech' name must be a string" in errors
    assert "Column 'tech.go' tag at index 1 must be a string" in errors
    assert "Column 'tech.bad' is missing required field: description" in errors
    assert "Column 'tech.bad' tags must be a list" in errors
    assert "Channel 'empty' is missing required field: columns" in errors


def test_valid_override_has_no_findings(taxonomy):
    report = validate_post_classification(Post(slug="p", channel="tech", column="go"), taxonomy)

    assert report.is_valid
    assert report.warnings == []
    assert report.valid_posts == 1


def test_unknown_channel_is_an_error(taxonomy):
    report = validate_post_classification(Post(slug="p", channel="finance"), taxonomy)

    assert report.errors == ["Post 'p': channel 'finance' does not exist"]


def test_unknown_column_is_an_error(taxonomy):
    report = validate_post_classification(Post(slug="p", channel="tech", column="rust"), taxonomy)

    assert report.errors == ["Post 'p': column 'rust' does not exist in channel 'tech'"]


def test_column_without_channel_is_a_warning(taxonomy):
    report = validate_post_classification(Post(slug="p", column="go"), taxonomy)

    assert report.is_valid
    assert report.warnings == ["Post 'p': column 'go' specified without channel"]


def test_post_without_any_classification_is_a_warning(taxonomy):
    report = validate_post_classification(Post(slug="p"), taxonomy)

    assert report.is_valid
    assert "no classification method available" in report.warnings[0]


def test_tags_matching_no_column_is_a_warning(taxonomy):
    report = validate_post_classification(Post(slug="p", tags=["cooking"]), taxonomy)

    assert report.is_valid
    assert "match no column" in report.warnings[0]


def test_posts_are_aggregated(taxonomy):
    posts = [
        Post(slug="ok", tags=["Go"]),
        Post(slug="bad", channel="finance"),
        Post(slug="loose"),
    ]

    report = validate_posts_classification(posts, taxonomy)

    assert report.total_posts == 3
    assert report.valid_posts == 2
    assert len(report.errors) == 1
    assert len(report.warnings) == 1
    assert not report.is_valid


def test_config_summary(taxonomy):
    summary = config_summary(taxonomy)

    assert summary.total_channels == 2
    assert summary.total_columns == 4
    assert summary.channels[0].key == "tech"
    assert summary.channels[0].column_keys == ["go", "general"]


def test_log_config_report(channels_config, caplog):
    with caplog.at_level(logging.INFO):
        report = log_config_report(channels_config)

    assert report.is_valid
    assert "2 channels, 4 columns" in caplog.text
    assert "validation passed" in caplog.text


def test_log_config_report_logs_errors(caplog):
    with caplog.at_level(logging.INFO):
        report = log_config_report({"tech": {"name": "Tech"}})

    assert not report.is_valid
    assert "missing required field: description" in caplog.text
