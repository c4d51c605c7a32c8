"""Format URLs for display (humans) and for links (computers)."""

from __future__ import annotations

import re
from dataclasses import replace

from urlelide.decode import DECODE_DEFAULT_CHARS, decode
from urlelide.elide import elide_url
from urlelide.encode import ENCODE_DEFAULT_CHARS, encode
from urlelide.idna_codec import ACE_PREFIX, domain_to_ascii, domain_to_unicode
from urlelide.parse import parse_url
from urlelide.url import Url

HTTPS_OR_MAILTO = re.compile(r"(?:https?:|mailto:)", re.IGNORECASE)

# keep literal %XX sequences the user typed from being unescaped twice
HUMAN_DECODE_CHARS = DECODE_DEFAULT_CHARS.add("%")


def _is_https_or_mailto(protocol: str | None) -> bool:
    return protocol is not None and HTTPS_OR_MAILTO.fullmatch(protocol) is not None


def _map_components(url: Url, func) -> Url:
    """Apply ``func`` to auth, hash, search and pathname where present."""
    return replace(
        url,
        auth=func(url.auth) if url.auth is not None else None,
        hash=func(url.hash) if url.hash is not None else None,
        search=func(url.search) if url.search is not None else None,
        pathname=func(url.pathname) if url.pathname is not None else None,
    )


def format_url_for_computers(url: str) -> str:
    """Normalize ``url`` for use in an ``href``.

    Lowercases the protocol, punycode-encodes the hostname of web and mail
    links, and percent-encodes everything unsafe in the other components
    while keeping existing escapes::

        >>> format_url_for_computers("https://ουτοπία.δπθ.gr/")
        'https://xn--kxae4bafwg.xn--pxaix.gr/'
    """
    parsed = parse_url(url, True)

    if parsed.protocol is not None:
        parsed = replace(parsed, protocol=parsed.protocol.lower())

    if parsed.hostname and (parsed.protocol is None or _is_https_or_mailto(parsed.protocol)):
        try:
            parsed = replace(parsed, hostname=domain_to_ascii(parsed.hostname))
        except UnicodeError:
            # not a valid IDN, leave the host as typed
            pass

    parsed = _map_components(parsed, lambda s: encode(s, ENCODE_DEFAULT_CHARS, True))
    return str(parsed)


def format_url_for_humans(url: str, max_length: int) -> str:
    """Render ``url`` readably in about ``max_length`` characters.

    Decodes punycode and percent-escapes, drops ``http(s):``/``mailto:``
    and a lone ``/`` path, then elides the middle of the path, subdomains
    and finally the tail::

        >>> format_url_for_humans("https://www.google.com/foobar", 16)
        'google.com/foob…'
    """
    parsed = parse_url(url, True)

    if parsed.protocol is None and not parsed.slashes and parsed.hostname is None:
        # `www.example.com` defaults to `//www.example.com`
        parsed = parse_url("//" + url.strip(), True)

    if parsed.hostname and parsed.hostname.lower().startswith(ACE_PREFIX):
        hostname, _ = domain_to_unicode(parsed.hostname)
        parsed = replace(parsed, hostname=hostname)

    parsed = _map_components(parsed, lambda s: decode(s, HUMAN_DECODE_CHARS))

    if parsed.pathname == "/" and parsed.search is None and parsed.hash is None:
        parsed = replace(parsed, pathname="")

    if _is_https_or_mailto(parsed.protocol):
        parsed = replace(parsed, protocol=None, slashes=False)

    return elide_url(parsed, max_length)
