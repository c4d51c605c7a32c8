"""The parsed URL record and its serializer."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Url:
    """URL split into its textual components.

    Created by :func:`urlelide.parse.parse_url`. Fields hold the exact
    substrings of the input; nothing is decoded or normalized.

    Attributes:
        protocol: Scheme including the trailing colon, e.g. ``"http:"``.
        slashes: True when ``//`` followed the scheme.
        auth: User info without the ``@``, e.g. ``"user:pass"``.
        hostname: Host without port. IPv6 literals are stored without
            brackets, e.g. ``"::1"``.
        port: Port digits, e.g. ``"8080"``.
        pathname: Everything after the host up to ``?`` or ``#``.
        search: Query string including the leading ``?``.
        hash: Fragment including the leading ``#``.
    """

    protocol: str | None = None
    slashes: bool = False
    auth: str | None = None
    hostname: str | None = None
    port: str | None = None
    pathname: str | None = None
    search: str | None = None
    hash: str | None = None

    def __str__(self) -> str:
        """Concatenate the components back into a URL.

        No escaping or validation is done. For anything produced by the
        parser this returns the original input, but a hand-edited record
        may serialize to a broken URL.
        """
        parts = []

        if self.protocol is not None:
            parts.append(self.protocol)
        if self.slashes:
            parts.append("//")
        if self.auth is not None:
            parts.append(self.auth + "@")
        if self.hostname is not None:
            if ":" in self.hostname:
                # ipv6 address
                parts.append(f"[{self.hostname}]")
            else:
                parts.append(self.hostname)
        if self.port is not None:
            parts.append(":" + self.port)
        if self.pathname is not None:
            parts.append(self.pathname)
        if self.search is not None:
            parts.append(self.search)
        if self.hash is not None:
            parts.append(self.hash)

        return "".join(parts)

    def to_dict(self) -> dict[str, str | bool | None]:
        return asdict(self)
