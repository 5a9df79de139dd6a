"""Shell session state: console, filesystem, user, environment and processes."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .console import DEFAULT_ATTR, Console
from .filesystem import MAX_PATH, FileSystem
from .textutil import Layout

TICKS_PER_SECOND = 18
MAX_ENV_VARS = 16
MAX_ALIASES = 16
MAX_HISTORY = 32


@dataclass
class Process:
    """One entry of the simulated process table."""

    pid: int
    name: str
    state: str
    mem_usage: int
    priority: int


def _initial_processes() -> list[Process]:
    return [
        Process(1, "KERNEL", "RUNNING", 128, 0),
        Process(2, "SHELL", "RUNNING", 64, 10),
        Process(3, "NETSVC", "SLEEPING", 32, 10),
        Process(4, "DISPSVC", "SLEEPING", 48, 15),
    ]


def _default_env() -> dict[str, str]:
    return {"PATH": "/bin", "HOME": "C:\\", "SHELL": "/bin/sh", "USER": "root"}


class Session:
    """Everything a shell command needs to do its work.

    ``now`` returns the current wall-clock time and ``ticks`` the timer
    ticks since start-up (about 18 per second); both can be replaced for
    deterministic behaviour.
    """

    def __init__(
        self,
        console: Console,
        fs: FileSystem,
        now: Optional[Callable[[], datetime]] = None,
        ticks: Optional[Callable[[], int]] = None,
    ) -> None:
        self.console = console
        self.fs = fs
        self.now = now if now is not None else datetime.now
        if ticks is None:
            start = time.monotonic()

            def ticks() -> int:
                return int((time.monotonic() - start) * TICKS_PER_SECOND)

        self.ticks = ticks
        self.current_user = "root"
        self.color = DEFAULT_ATTR
        self.keyboard_layout = Layout.ENGLISH
        self.env: dict[str, str] = _default_env()
        self.aliases: dict[str, str] = {}
        self.history: list[str] = []
        self._processes: list[Process] = []

    def full_path(self, name: str) -> str:
        """Join ``name`` onto the current directory, capped at the path limit."""
        return (self.fs.current_dir + name)[: MAX_PATH - 1]

    def find_user(self, username: str) -> Optional[int]:
        """Return the index of ``username`` in the user table, or None."""
        for idx, user in enumerate(self.fs.users):
            if user.username == username:
                return idx
        return None

    def processes(self) -> list[Process]:
        """Return the live process table, creating the system processes if empty."""
        if not self._processes:
            self._processes.extend(_initial_processes())
        return self._processes