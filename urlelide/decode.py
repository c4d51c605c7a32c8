"""Percent-decoding that keeps meaningful delimiters escaped."""

from __future__ import annotations

import re

from urlelide.asciiset import AsciiSet

DECODE_DEFAULT_CHARS = AsciiSet.from_chars(";/?:@&=+$,#")
DECODE_COMPONENT_CHARS = AsciiSet.empty()

_ENCODED_RUN = re.compile(r"(?:%[a-fA-F0-9]{2})+")


def decode(text: str, exclude: AsciiSet = DECODE_DEFAULT_CHARS) -> str:
    """Decode runs of ``%XX`` triples in ``text``.

    ASCII bytes found in ``exclude`` stay escaped exactly as written, so
    ``decode("%20%25%20", AsciiSet.from_chars("%"))`` gives ``" %25 "``.
    Each run is read as UTF-8; a malformed subsequence turns into a single
    U+FFFD covering its maximal subpart (``%e3%95%55`` -> ``"\\ufffdU"``).
    Anything that is not a valid triple is copied through untouched.
    """

    def replace_run(match: re.Match) -> str:
        run = match.group(0)
        buf = bytearray()

        for i in range(0, len(run), 3):
            triple = run[i:i + 3]
            byte = int(triple[1:], 16)
            if byte < 0x80 and byte in exclude:
                buf += triple.encode("ascii")
            else:
                buf.append(byte)

        # CPython's "replace" handler substitutes per maximal subpart
        return buf.decode("utf-8", errors="replace")

    return _ENCODED_RUN.sub(replace_run, text)
