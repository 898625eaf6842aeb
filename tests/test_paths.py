"""Tests for destination prefix and key helpers."""

import pytest

from s3_put.core.paths import build_destination_key, normalize_destination_prefix


class TestNormalizeDestinationPrefix:
    """Tests for normalize_destination_prefix."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, ""),
            ("", ""),
            ("   ", ""),
            ("/", ""),
            ("v1", "v1/"),
            ("v1/", "v1/"),
            ("/v1", "v1/"),
            ("/v1/", "v1/"),
            ("  static/v1  ", "static/v1/"),
            ("//double", "double/"),
            ("/ spaced", "spaced/"),
            ("a/b/c", "a/b/c/"),
            ("v1//", "v1/"),
            ("//x///", "x/"),
        ],
    )
    def test_normalization(self, raw, expected):
        assert normalize_destination_prefix(raw) == expected

    @pytest.mark.parametrize(
        "raw", ["v1", "/v1", "v1/", " /assets/ ", "//x//", "/ / y", "v1//", "a b", "\t/t\n"]
    )
    def test_never_leading_slash_single_trailing_and_idempotent(self, raw):
        once = normalize_destination_prefix(raw)
        twice = normalize_destination_prefix(once)

        assert not once.startswith("/")
        if once:
            assert once.endswith("/")
            assert not once.endswith("//")
        assert twice == once


class TestBuildDestinationKey:
    """Tests for build_destination_key."""

    def test_prefix_and_relative_path(self):
        assert build_destination_key("v1/", "css/app.css") == "v1/css/app.css"

    def test_empty_prefix(self):
        assert build_destination_key("", "js/app.js") == "js/app.js"

    def test_backslashes_are_normalized(self):
        assert build_destination_key("v1/", "css\\nested\\app.css") == "v1/css/nested/app.css"

    def test_no_leading_slash(self):
        assert build_destination_key("", "/index.html") == "index.html"
