"""Percent-encoding that leaves already-escaped input alone."""

from __future__ import annotations

import re

from urlelide.asciiset import AsciiSet

ENCODE_DEFAULT_CHARS = AsciiSet.from_chars(";/?:@&=+$,-_.!~*'()#")
ENCODE_COMPONENT_CHARS = AsciiSet.from_chars("-_.!~*'()")

_ESCAPED = re.compile(rb"%[0-9a-fA-F]{2}")


def encode(text: str, exclude: AsciiSet = ENCODE_DEFAULT_CHARS, keep_escaped: bool = True) -> str:
    """Percent-encode every UTF-8 byte of ``text`` outside ``exclude``.

    Alphanumerics are always kept. With ``keep_escaped``, a valid ``%XX``
    triple already present in the input is copied as is instead of
    escaping its ``%``.
    """
    safe = exclude.with_alphanumeric()
    data = text.encode("utf-8")
    out = []
    i = 0

    while i < len(data):
        byte = data[i]

        if keep_escaped and byte == 0x25 and _ESCAPED.match(data, i):
            out.append(data[i:i + 3].decode("ascii"))
            i += 3
            continue

        if byte in safe:
            out.append(chr(byte))
        else:
            out.append(f"%{byte:02X}")
        i += 1

    return "".join(out)
