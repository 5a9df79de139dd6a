"""Small text helpers shared by the shell commands."""

from __future__ import annotations

import base64
from enum import IntEnum

UINT32_MASK = 0xFFFFFFFF


class Layout(IntEnum):
    """Keyboard layouts the shell knows about."""

    ENGLISH = 0
    SERBIAN = 1


_SERBIAN_MAP = {
    "@": '"',
    "^": "&",
    "&": "/",
    "*": "(",
    "(": ")",
    ")": "=",
    "[": "s",
    "{": "S",
    "]": "c",
    "}": "C",
    "\\": "z",
    "|": "Z",
    ";": "d",
    ":": "D",
}


def hash_string(s: str) -> int:
    """Return the 32-bit djb2 hash of ``s`` (bytes taken as signed chars)."""
    h = 5381
    for b in s.encode("utf-8"):
        value = b - 256 if b >= 128 else b
        h = (h * 33 + value) & UINT32_MASK
    return h


def to_uint(s: str) -> int:
    """Parse leading decimal digits as an unsigned 32-bit number (0 if none)."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = (n * 10 + ord(ch) - ord("0")) & UINT32_MASK
    return n


def next_token(s: str, max_len: int) -> tuple[str, str]:
    """Split off the next blank-separated token of at most ``max_len - 1`` chars.

    Returns the token and the unconsumed rest of the string.
    """
    s = s.lstrip(" \t")
    limit = max(max_len - 1, 0)
    end = 0
    while end < len(s) and end < limit and s[end] not in " \t":
        end += 1
    return s[:end], s[end:]


def hex32(n: int) -> str:
    """Format ``n`` as eight upper-case hexadecimal digits."""
    return f"{n & UINT32_MASK:08X}"


def base64_encode(text: str) -> str:
    """Return the padded base64 encoding of ``text``'s UTF-8 bytes."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def prime_factors(n: int) -> list[int]:
    """Return the prime factors of ``n`` in ascending order, with repeats."""
    factors: list[int] = []
    orig = n
    d = 2
    while d * d <= orig and n > 1:
        while n % d == 0:
            factors.append(d)
            n //= d
        d += 1
    if n > 1:
        factors.append(n)
    return factors


def keyboard_remap(c: str, layout: Layout | int = Layout.ENGLISH) -> str:
    """Translate a typed character according to the keyboard layout."""
    if Layout(layout) is Layout.ENGLISH:
        return c
    return _SERBIAN_MAP.get(c, c)