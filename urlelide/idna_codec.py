"""Thin wrapper around the ``idna`` package for hostname conversion."""

from __future__ import annotations

from functools import lru_cache

import idna

ACE_PREFIX = "xn--"


@lru_cache(maxsize=256)
def domain_to_ascii(hostname: str) -> str:
    """Convert a Unicode hostname to its ASCII (punycode) form.

    Applies UTS #46 mapping first, so ``"Bücher.COM"`` becomes
    ``"xn--bcher-kva.com"``. Raises ``idna.IDNAError`` (a ``UnicodeError``)
    when the name cannot be encoded.
    """
    return idna.encode(hostname, uts46=True).decode("ascii")


@lru_cache(maxsize=256)
def domain_to_unicode(hostname: str) -> tuple[str, bool]:
    """Convert punycode labels back to Unicode, label by label.

    Never raises: a label that fails to decode is kept as written and the
    second item of the result is set to True.
    """
    labels = []
    had_errors = False

    for label in hostname.split("."):
        if not label.lower().startswith(ACE_PREFIX):
            labels.append(label)
            continue
        try:
            labels.append(idna.decode(label))
        except UnicodeError:
            labels.append(label)
            had_errors = True

    return ".".join(labels), had_errors
