"""Tests for urlelide.format module."""

import idna
import pytest

from urlelide import format as url_format
from urlelide.format import format_url_for_computers, format_url_for_humans

REDDIT = (
    "https://www.reddit.com/r/programming/comments/vxttiq/"
    "comment/ifyqsqt/?utm_source=reddit&utm_medium=web2x&context=3"
)
CHROMIUM = "https://blog.chromium.org/2019/10/no-more-mixed-messages-about-https.html"


class TestFormatForComputers:
    def test_idna_host(self):
        assert format_url_for_computers("https://ουτοπία.δπθ.gr/") == "https://xn--kxae4bafwg.xn--pxaix.gr/"

    def test_lowercases_protocol_and_host(self):
        assert format_url_for_computers("HTTP://www.ExAmPlE.com/") == "http://www.example.com/"

    def test_escapes_unsafe_chars(self):
        assert format_url_for_computers("https://example.com/a b?q=[1]") == "https://example.com/a%20b?q=%5B1%5D"

    def test_keeps_existing_escapes(self):
        assert format_url_for_computers("https://example.com/a%20b") == "https://example.com/a%20b"

    def test_mailto_host(self):
        assert format_url_for_computers("mailto:Foo@Bücher.de") == "mailto:Foo@xn--bcher-kva.de"

    def test_scheme_relative_host(self):
        assert format_url_for_computers("//Bücher.de/x") == "//xn--bcher-kva.de/x"

    def test_other_protocols_keep_host(self):
        assert format_url_for_computers("ftp://Bücher.de/") == "ftp://Bücher.de/"

    def test_idna_failure_leaves_host(self):
        assert format_url_for_computers("https://a..b/") == "https://a..b/"

    def test_idna_failure_is_not_fatal(self, monkeypatch):
        def fail(hostname):
            raise idna.IDNAError(hostname)

        monkeypatch.setattr(url_format, "domain_to_ascii", fail)
        assert format_url_for_computers("https://example.com/ü") == "https://example.com/%C3%BC"


class TestFormatForHumans:
    def test_mailto(self):
        assert format_url_for_humans("mailto:foo@example.org", 100) == "foo@example.org"

    def test_www_stripped_before_truncation(self):
        assert format_url_for_humans("https://www.google.com/foobar", 16) == "google.com/foob…"

    def test_path_elision(self):
        assert format_url_for_humans(CHROMIUM, 41) == "blog.chromium.org/…/no-more-mixed-messag…"

    @pytest.mark.parametrize(
        "max_length, expected",
        [
            (20, "reddit.com/…/ifyqsqt…"),
            (30, "www.reddit.com/r/…/ifyqsqt/?ut…"),
            (50, "www.reddit.com/r/programming/comments/…/ifyqsqt/?u…"),
        ],
    )
    def test_query_url(self, max_length, expected):
        assert format_url_for_humans(REDDIT, max_length) == expected

    def test_punycode_host_decoded(self):
        assert format_url_for_humans("https://xn--bcher-kva.de/", 50) == "bücher.de"

    def test_lone_slash_dropped(self):
        assert format_url_for_humans("http://example.com/", 50) == "example.com"
        assert format_url_for_humans("https://example.com/?q", 50) == "example.com/?q"

    def test_percent_decoded(self):
        assert format_url_for_humans("https://example.com/a%20b", 50) == "example.com/a b"
        assert format_url_for_humans("https://example.com/%C3%BC", 50) == "example.com/ü"

    def test_literal_percent_stays_encoded(self):
        assert format_url_for_humans("https://example.com/a%25b", 50) == "example.com/a%25b"

    def test_delimiters_stay_encoded(self):
        assert format_url_for_humans("https://example.com/a%2Fb", 50) == "example.com/a%2Fb"

    def test_other_protocols_kept(self):
        assert format_url_for_humans("ftp://ftp.example.com/pub/", 50) == "ftp://ftp.example.com/pub/"

    def test_bare_domain_parsed_as_host(self):
        assert format_url_for_humans("www.example.com", 50) == "//www.example.com"

    @pytest.mark.parametrize("max_length", [0, 1])
    def test_tiny_budget(self, max_length):
        assert format_url_for_humans(REDDIT, max_length) == "…"
        assert format_url_for_humans("https://example.com/", max_length) == "…"

    @pytest.mark.parametrize("url", [REDDIT, CHROMIUM, "https://www.google.com/foobar", "mailto:foo@example.org"])
    def test_budget_respected(self, url):
        for max_length in range(1, 80):
            assert len(format_url_for_humans(url, max_length)) <= max_length + 1
