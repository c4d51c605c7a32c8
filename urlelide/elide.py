"""Shorten URLs for display by replacing spans with an ellipsis.

The approach follows Chromium's ``url_formatter::ElideUrl``: drop middle
path segments first, then subdomains, and only then cut the tail.
"""

from __future__ import annotations

import re
from dataclasses import replace

from urlelide.url import Url

ELLIPSIS = "…"

# dotted-quad hosts (and anything that looks like one) keep all labels
IP_HOST_CHECK = re.compile(r"\.\d")


def elide_text(text: str, max_length: int, query_ellipsis: bool = False) -> str:
    """Cut ``text`` so it fits ``max_length`` characters, ending in ``…``.

    The ellipsis is counted against the budget unless ``query_ellipsis`` is
    set (the URL carries a query or fragment), in which case ``max_length``
    characters are kept and the result is one character over. Lengths of 0
    and 1 leave nothing but ``…``.
    """
    if max_length <= 1 and text:
        return ELLIPSIS
    if len(text) <= max_length:
        return text
    keep = max_length if query_ellipsis and max_length > 1 else max_length - 1
    return text[:max(keep, 0)] + ELLIPSIS


def _path_candidates(pathname: str):
    """Yield shorter versions of ``pathname``, one more segment elided each time.

    ``/a/b/c/d`` gives ``/a/b/…/d``, ``/a/…/d``, ``/…/d``.
    """
    components = pathname.split("/")
    filename = components[-1]
    prefix = components[:-1]

    if not filename and len(components) > 1:
        # trailing slash: keep the last directory as the filename
        filename = components[-2] + "/"
        prefix = components[:-2]

    for i in range(len(prefix) - 1, 0, -1):
        yield "/".join(prefix[:i]) + "/" + ELLIPSIS + "/" + filename


def _host_candidates(hostname: str):
    """Yield shorter versions of ``hostname`` with subdomains removed."""
    labels = hostname.split(".")

    if hostname.startswith("www.") and len(labels) > 2:
        labels = labels[1:]
        yield ".".join(labels)

    elided = False
    while len(labels) > 2:
        if len(labels) == 3 and elided and len(labels[1]) < 3:
            # second-level country domains, e.g. example.co.uk
            break
        if len(labels) == 3 and not elided and len(labels[0]) <= 4:
            # short third-level labels are kept, e.g. blog.chromium.org
            break
        labels = labels[1:]
        elided = True
        yield ELLIPSIS + ".".join(labels)


def elide_url(url: Url, max_length: int) -> str:
    """Serialize ``url`` in at most about ``max_length`` characters.

    Query and fragment are not shortened on their own; they get cut by the
    final truncation, so path and host only need to fit
    ``max_length + len(query) - 2`` characters to leave a readable
    ``?...`` tail.
    """
    url_str = str(url)
    query_length = len(url.search or "") + len(url.hash or "")
    query_ellipsis = query_length > 0
    max_path_length = max_length + query_length - 2

    if len(url_str) <= max_path_length:
        return elide_text(url_str, max_length, query_ellipsis)

    if url.pathname:
        for pathname in _path_candidates(url.pathname):
            url = replace(url, pathname=pathname)
            url_str = str(url)
            if len(url_str) <= max_path_length:
                return elide_text(url_str, max_length, query_ellipsis)

    if url.hostname and ":" not in url.hostname and not IP_HOST_CHECK.search(url.hostname):
        for hostname in _host_candidates(url.hostname):
            url = replace(url, hostname=hostname)
            url_str = str(url)
            if len(url_str) <= max_path_length:
                break

    return elide_text(url_str, max_length, query_ellipsis)
