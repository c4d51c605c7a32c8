"""Fixed-size character class over the 7-bit ASCII range.

Used by the percent codec to decide which bytes pass through unescaped
(encode) or stay escaped (decode).
"""

from __future__ import annotations

from dataclasses import dataclass

_ALPHANUMERIC = 0x07FFFFFE07FFFFFE03FF000000000000


def _code(byte: int | str) -> int:
    """Return the code point of a byte or one-character string."""
    code = ord(byte) if isinstance(byte, str) else byte
    if not 0 <= code <= 0x7F:
        raise ValueError(f"character out of ASCII range: {byte!r}")
    return code


@dataclass(frozen=True)
class AsciiSet:
    """Immutable 128-bit membership set.

    Every mutating method returns a new set. Characters outside
    ``0x00..0x7f`` are rejected with ``ValueError``: passing them is a bug
    in the caller, not bad user input.
    """

    bits: int = 0

    @classmethod
    def empty(cls) -> AsciiSet:
        return cls()

    @classmethod
    def from_chars(cls, chars: str) -> AsciiSet:
        """Build a set from every character of ``chars``."""
        result = cls()
        for ch in chars:
            result = result.add(ch)
        return result

    def add(self, byte: int | str) -> AsciiSet:
        return AsciiSet(self.bits | 1 << _code(byte))

    def remove(self, byte: int | str) -> AsciiSet:
        return AsciiSet(self.bits & ~(1 << _code(byte)))

    def contains(self, byte: int | str) -> bool:
        code = ord(byte) if isinstance(byte, str) else byte
        if not 0 <= code <= 0x7F:
            return False
        return bool(self.bits & 1 << code)

    __contains__ = contains

    def with_alphanumeric(self) -> AsciiSet:
        """Return this set plus ``[A-Za-z0-9]``."""
        return AsciiSet(self.bits | _ALPHANUMERIC)

    def __or__(self, other: AsciiSet) -> AsciiSet:
        return AsciiSet(self.bits | other.bits)
