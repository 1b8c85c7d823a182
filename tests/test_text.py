"""Tests for the shared text helpers."""

import pytest

from directive_sugar.utils.text import escape_attribute, escape_html, shorten_url, url_domain


class TestEscape:
    def test_escape_html_keeps_quotes(self) -> None:
        assert escape_html('<b> & "q"') == '&lt;b&gt; &amp; "q"'

    def test_escape_attribute_quotes(self) -> None:
        assert escape_attribute('a "b" & c') == "a &quot;b&quot; &amp; c"


class TestShortenUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com", "example.com"),
            ("http://example.com/", "example.com"),
            ("//cdn.example.com/a", "cdn.example.com/a..."),
            ("https://example.com/docs/getting-started", "example.com/docs/getting-s..."),
            ("example.com/abc", "example.com/abc..."),
        ],
    )
    def test_shorten(self, url: str, expected: str) -> None:
        assert shorten_url(url) == expected


class TestUrlDomain:
    def test_with_scheme(self) -> None:
        assert url_domain("https://Docs.Python.org:443/3/") == "docs.python.org"

    def test_without_scheme(self) -> None:
        assert url_domain("example.com/path") == "example.com"

    def test_empty(self) -> None:
        assert url_domain("") == ""
