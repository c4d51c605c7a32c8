"""Lenient URL parser.

Derived from the joyent/node ``url.parse()`` algorithm, with these changes:

1. No leading slash is added to paths: in ``http://foo?bar`` the pathname
   is ``""``, not ``"/"``.
2. Backslashes are not replaced with slashes, so ``http:\\\\example.org\\``
   is a relative path.
3. A trailing colon belongs to the path: in ``http://example.org:foo`` the
   pathname is ``":foo"``.
4. Nothing is percent-encoded in the result.
5. Derived properties (``host``, ``path``, ``query``, ...) are not
   returned; build them from the other fields if needed.
"""

from __future__ import annotations

import re

from urlelide.url import Url

# Reference: RFC 3986, RFC 1808, RFC 2396

PROTOCOL_PATTERN = re.compile(r"[a-z0-9.+-]+:", re.IGNORECASE | re.ASCII)
PORT_PATTERN = re.compile(r":[0-9]*\Z")
HOST_PATTERN = re.compile(r"//[^@/]+@[^@/]+")

# Special case for a simple path URL
SIMPLE_PATH_PATTERN = re.compile(r"(//?[^/?\s]?[^?\s]*)(\?\S*)?")

NON_HOST_CHARS = frozenset(
    # RFC 2396: characters reserved for delimiting URLs.
    "<>\"` \r\n\t"
    # RFC 2396: characters not allowed for various reasons.
    "{}|\\^`"
    # Allowed by RFCs, but cause of XSS attacks. Always escape these.
    "'"
    # Characters that are never ever allowed in a hostname.
    "%/?;#"
)

HOST_ENDING_CHARS = frozenset("/?#")

HOSTNAME_MAX_LEN = 255

HOSTNAME_PART_PATTERN = re.compile(r"[+a-z0-9A-Z_-]{0,63}")
HOSTNAME_PART_START = re.compile(r"([+a-z0-9A-Z_-]{0,63})(.*)", re.DOTALL)

# protocols that never have a hostname.
HOSTLESS_PROTOCOL = frozenset({"javascript", "javascript:"})

# protocols that always contain a // bit.
SLASHED_PROTOCOL = frozenset({
    "http", "https", "ftp", "gopher", "file",
    "http:", "https:", "ftp:", "gopher:", "file:",
})


def _find_first(text: str, chars: frozenset[str]) -> int | None:
    for i, ch in enumerate(text):
        if ch in chars:
            return i
    return None


def _split_hostname(hostname: str) -> tuple[str, str]:
    """Cut ``hostname`` at the first label that cannot be a host label.

    Returns ``(valid_hostname, remainder)``. Non-ASCII characters count as
    valid so IDNA hosts survive; the remainder is handed back to the path.
    """
    parts = hostname.split(".")

    for i, part in enumerate(parts):
        if not part or HOSTNAME_PART_PATTERN.fullmatch(part):
            continue

        # placeholder keeps the label length intact
        ascii_part = "".join("x" if ord(ch) > 127 else ch for ch in part)
        if HOSTNAME_PART_PATTERN.fullmatch(ascii_part):
            continue

        valid = HOSTNAME_PART_START.match(part).group(1)
        valid_len = len(".".join(parts[:i] + [valid]))
        return hostname[:valid_len], hostname[valid_len:]

    return hostname, ""


def parse_url(url: str, slashes_denote_host: bool = False) -> Url:
    """Split ``url`` into a :class:`~urlelide.url.Url` without rejecting anything.

    Args:
        url: Any string; surrounding whitespace is ignored.
        slashes_denote_host: Treat a leading ``//`` as the start of a host
            even without a protocol (``//foo/bar`` -> host ``foo``).
    """
    protocol = None
    slashes = False
    auth = None
    hostname = None
    port = None
    pathname = None
    search = None
    hash_ = None

    # trim before proceeding.
    # This is to support parse stuff like "  http://foo.com  \n"
    rest = url.strip()

    if not slashes_denote_host and "#" not in url:
        # Try fast path regexp
        simple_path = SIMPLE_PATH_PATTERN.fullmatch(rest)
        if simple_path:
            return Url(pathname=simple_path.group(1), search=simple_path.group(2))

    proto_match = PROTOCOL_PATTERN.match(rest)
    if proto_match:
        protocol = proto_match.group(0)
        rest = rest[len(protocol):]

    # figure out if it's got a host
    # user@server is *always* interpreted as a hostname, and url
    # resolution will treat //foo/bar as host=foo,path=bar because that's
    # how the browser resolves relative URLs.
    if slashes_denote_host or protocol is not None or HOST_PATTERN.match(rest):
        if rest.startswith("//") and protocol not in HOSTLESS_PROTOCOL:
            rest = rest[2:]
            slashes = True

    if protocol not in HOSTLESS_PROTOCOL and (
        slashes or (protocol is not None and protocol not in SLASHED_PROTOCOL)
    ):
        # there's a hostname.
        # the first instance of /, ?, ;, or # ends the host.
        #
        # If there is an @ in the hostname, then non-host chars *are* allowed
        # to the left of the last @ sign, unless some host-ending character
        # comes *before* the @-sign.
        #
        # ex:
        # http://a@b@c/ => user:a@b host:c
        # http://a@b?@c => user:a host:c path:/?@c
        host_end = _find_first(rest, HOST_ENDING_CHARS)
        if host_end is not None:
            # atSign must be in auth portion.
            # http://a@b/c@d => host:b auth:a path:/c@d
            at_sign = rest.rfind("@", 0, host_end)
        else:
            at_sign = rest.rfind("@")

        if at_sign != -1:
            auth = rest[:at_sign]
            rest = rest[at_sign + 1:]

        # the host is the remaining to the left of the first non-host char
        host_end = _find_first(rest, NON_HOST_CHARS)
        if host_end is None:
            host_end = len(rest)
        if rest[:host_end].endswith(":"):
            host_end -= 1
        host = rest[:host_end]
        rest = rest[host_end:]

        # pull out port.
        port_text = ""
        port_match = PORT_PATTERN.search(host)
        if port_match:
            port_text = port_match.group(0)
            if port_text != ":":
                port = port_text[1:]
            host = host[:port_match.start()]
        hostname = host

        # if hostname begins with [ and ends with ]
        # assume that it's an IPv6 address.
        ipv6_hostname = hostname.startswith("[") and hostname.endswith("]")

        if not ipv6_hostname:
            hostname, not_host = _split_hostname(hostname)
            if not_host:
                # the port followed the invalid part, so it is path text now
                rest = not_host + port_text + rest
                port = None

        if len(hostname) > HOSTNAME_MAX_LEN:
            hostname = ""

        # strip [ and ] from the hostname
        if ipv6_hostname:
            hostname = hostname[1:-1]

    # chop off from the tail first.
    hash_pos = rest.find("#")
    if hash_pos != -1:
        # got a fragment string.
        hash_ = rest[hash_pos:]
        rest = rest[:hash_pos]

    qm = rest.find("?")
    if qm != -1:
        search = rest[qm:]
        rest = rest[:qm]

    if rest:
        pathname = rest

    if (
        protocol is not None
        and protocol.lower() in SLASHED_PROTOCOL
        and hostname
        and pathname is None
    ):
        pathname = ""

    return Url(
        protocol=protocol,
        slashes=slashes,
        auth=auth,
        hostname=hostname,
        port=port,
        pathname=pathname,
        search=search,
        hash=hash_,
    )
