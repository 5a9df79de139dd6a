"""Character console with scripted keyboard input and an optional output hook."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, Optional, Union

KeySource = Union[str, Iterable[Union[int, str]], None]

DEFAULT_ATTR = 0x07


def _key_codes(keys: KeySource) -> list[int]:
    if keys is None:
        return []
    if isinstance(keys, str):
        return [ord(ch) for ch in keys]
    return [ord(k) if isinstance(k, str) else int(k) & 0xFFFF for k in keys]


class Console:
    """A text console.

    Output goes to the installed hook when one is set, otherwise into an
    in-memory screen buffer. Keyboard input comes from a queue of key codes.
    """

    def __init__(self, keys: KeySource = None) -> None:
        self._screen: list[str] = []
        self._keys: deque[int] = deque(_key_codes(keys))
        self._hook: Optional[Callable[[str], None]] = None
        self.attr = DEFAULT_ATTR

    def set_hook(self, hook: Optional[Callable[[str], None]]) -> None:
        """Redirect character output to ``hook``; ``None`` restores the screen."""
        self._hook = hook

    def putc(self, c: str) -> None:
        """Write one character."""
        if self._hook is not None:
            self._hook(c)
        else:
            self._screen.append(c)

    def puts(self, s: str) -> None:
        """Write a string character by character."""
        for ch in s:
            self.putc(ch)

    def cls(self) -> None:
        """Clear the screen buffer; a hooked terminal manages its own screen."""
        if self._hook is None:
            self._screen.clear()

    def set_attr(self, attr: int) -> None:
        """Set the current text colour attribute."""
        self.attr = attr & 0xFF

    def feed(self, keys: KeySource) -> None:
        """Queue more key codes for :meth:`getkey`."""
        self._keys.extend(_key_codes(keys))

    def getkey(self) -> int:
        """Return the next key code; raise EOFError when no input is left."""
        if not self._keys:
            raise EOFError("no keyboard input available")
        return self._keys.popleft()

    def text(self) -> str:
        """Return everything currently on the screen."""
        return "".join(self._screen)

    def take(self) -> str:
        """Return the screen contents and clear them."""
        out = self.text()
        self._screen.clear()
        return out