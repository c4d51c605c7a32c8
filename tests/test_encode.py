"""Tests for urlelide.encode module."""

from urlelide.asciiset import AsciiSet
from urlelide.encode import ENCODE_COMPONENT_CHARS, ENCODE_DEFAULT_CHARS, encode


class TestEncode:
    def test_plain_ascii_unchanged(self):
        assert encode("abcXYZ019") == "abcXYZ019"

    def test_default_set_passes_delimiters(self):
        assert encode(";/?:@&=+$,-_.!~*'()#") == ";/?:@&=+$,-_.!~*'()#"

    def test_unsafe_chars(self):
        assert encode("[]^") == "%5B%5D%5E"
        assert encode("\r\n") == "%0D%0A"
        assert encode("a b") == "a%20b"

    def test_uppercase_hex(self):
        assert encode("\x1f") == "%1F"

    def test_non_ascii_as_utf8_bytes(self):
        assert encode("ü") == "%C3%BC"
        assert encode("ﾟ") == "%EF%BE%9F"
        assert encode("\U0001f600") == "%F0%9F%98%80"

    def test_component_set_escapes_delimiters(self):
        assert encode("a/b?c", ENCODE_COMPONENT_CHARS) == "a%2Fb%3Fc"

    def test_custom_exclude(self):
        assert encode("a b", AsciiSet.from_chars(" ")) == "a b"

    def test_empty_set_keeps_alphanumerics(self):
        assert encode("a.b", AsciiSet()) == "a%2Eb"


class TestEncodeKeepEscaped:
    def test_keeps_existing_escapes(self):
        assert encode("%20", ENCODE_DEFAULT_CHARS, True) == "%20"
        assert encode("%e2%82%AC", ENCODE_DEFAULT_CHARS, True) == "%e2%82%AC"

    def test_reencodes_when_disabled(self):
        assert encode("%20", ENCODE_DEFAULT_CHARS, False) == "%2520"

    def test_bare_percent_is_escaped(self):
        assert encode("%%%") == "%25%25%25"
        assert encode("%FG") == "%25FG"
        assert encode("100%") == "100%25"
        assert encode("%4") == "%254"
