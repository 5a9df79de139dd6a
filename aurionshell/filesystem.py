"""Flat path-keyed filesystem persisted to reserved disk sectors."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Union

from .disk import SECTOR_SIZE, SectorDisk
from .textutil import hash_string

MAX_FILES = 128
MAX_USERS = 32
MAX_FILENAME = 56
MAX_FILE_SIZE = 1024
MAX_CONTENTS = 64
MAX_PATH = 256

CURDIR_LBA = 499
DATA_START_LBA = 500
USER_START_LBA = DATA_START_LBA + 128
CONTENT_START_LBA = 700
SECTORS_PER_FILE = 16

LOADED_FILE_SLOTS = 64
LOADED_USER_SLOTS = 5

ENTRY_SIZE = 64
_ENTRY_FORMAT = "<56sIBBH"

ROOT_DIR = "C:\\"
DESKTOP_DIR = "C:\\Desktop\\"
APPLICATIONS_DIR = "C:\\Desktop\\Applications\\"
APP_SHORTCUTS = (
    "Terminal",
    "Notepad",
    "Paint",
    "Calculator",
    "Files",
    "Clock",
    "System Info",
)

ATTR_DIR = 0x10
ATTR_FILE = 0x20

Data = Union[bytes, bytearray, str]


class FileSystemError(Exception):
    """Raised when a filesystem operation cannot be carried out."""


class EntryType(IntEnum):
    FILE = 0
    DIR = 1


def _cstr(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _fixed(text: str, size: int) -> bytes:
    return text.encode("latin-1", errors="replace")[: size - 1]


def _as_bytes(data: Data) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


@dataclass
class FSEntry:
    """One file-table entry; ``data`` holds loaded content, if any."""

    name: str
    size: int = 0
    type: int = EntryType.FILE
    attr: int = 0
    parent_idx: int = 0
    data: Optional[bytes] = field(default=None, compare=False, repr=False)

    def pack(self) -> bytes:
        """Return the 64-byte on-disk form."""
        return struct.pack(
            _ENTRY_FORMAT,
            _fixed(self.name, MAX_FILENAME),
            self.size & 0xFFFFFFFF,
            int(self.type) & 0xFF,
            self.attr & 0xFF,
            self.parent_idx & 0xFFFF,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "FSEntry":
        """Build an entry from its on-disk form."""
        if len(data) < ENTRY_SIZE:
            raise FileSystemError("entry record too short")
        name, size, kind, attr, parent = struct.unpack_from(_ENTRY_FORMAT, data)
        kind = EntryType(kind) if kind in (0, 1) else kind
        return cls(_cstr(name), size, kind, attr, parent)


@dataclass
class UserEntry:
    """A user account with a 32-byte password hash."""

    username: str
    password_hash: bytes = bytes(32)

    def pack(self) -> bytes:
        """Return the 64-byte on-disk form."""
        name = _fixed(self.username, 32).ljust(32, b"\0")
        return name + bytes(self.password_hash[:32]).ljust(32, b"\0")

    @classmethod
    def unpack(cls, data: bytes) -> "UserEntry":
        """Build a user from its on-disk form."""
        if len(data) < 64:
            raise FileSystemError("user record too short")
        return cls(_cstr(data[:32]), bytes(data[32:64]))

    @classmethod
    def for_password(cls, username: str, password: str) -> "UserEntry":
        """Create a user whose hash is derived from ``password``."""
        h = hash_string(password)
        return cls(username[:31], h.to_bytes(4, "little") * 8)


class FileSystem:
    """The in-memory file and user tables with their disk persistence."""

    def __init__(self, disk: SectorDisk) -> None:
        self.disk = disk
        self.entries: list[FSEntry] = []
        self.users: list[UserEntry] = []
        self.current_dir = ROOT_DIR

    @property
    def content_count(self) -> int:
        """Number of entries holding stored content."""
        return sum(1 for e in self.entries if e.data is not None)

    def resolve(self, name: str) -> str:
        """Turn ``name`` into a full path relative to the current directory."""
        if name[1:2] == ":":
            return name[: MAX_PATH - 1]
        return (self.current_dir + name)[: MAX_PATH - 1]

    def find(self, path: str, kind: Optional[int] = None) -> Optional[int]:
        """Return the index of the first entry named ``path`` (of ``kind``)."""
        for idx, entry in enumerate(self.entries):
            if entry.name == path and (kind is None or entry.type == kind):
                return idx
        return None

    def add(self, path: str, kind: int = EntryType.FILE,
            attr: Optional[int] = None) -> int:
        """Append a new entry and return its index."""
        if len(self.entries) >= MAX_FILES:
            raise FileSystemError("Filesystem full")
        if attr is None:
            attr = ATTR_DIR if kind == EntryType.DIR else ATTR_FILE
        name = _fixed(path, MAX_FILENAME).decode("latin-1")
        self.entries.append(FSEntry(name, 0, EntryType(kind), attr))
        return len(self.entries) - 1

    def remove(self, path: str, kind: Optional[int] = None) -> FSEntry:
        """Remove and return the first entry named ``path`` (of ``kind``)."""
        idx = self.find(path, kind)
        if idx is None:
            raise FileSystemError(f"not found: {path}")
        return self.entries.pop(idx)

    def content(self, path: str) -> Optional[bytes]:
        """Return the stored content of ``path``, or None if it has none."""
        idx = self.find(path)
        if idx is None:
            raise FileSystemError(f"not found: {path}")
        return self.entries[idx].data

    def set_content(self, path: str, data: Data) -> None:
        """Replace the content of an existing entry (not persisted)."""
        idx = self.find(path)
        if idx is None:
            raise FileSystemError(f"not found: {path}")
        entry = self.entries[idx]
        if entry.data is None and self.content_count >= MAX_CONTENTS:
            raise FileSystemError("Too many files")
        raw = _as_bytes(data)[:MAX_FILE_SIZE]
        entry.data = raw
        entry.size = len(raw)

    def save_file_content(self, name: str, data: Data) -> None:
        """Create or overwrite a file with ``data`` and persist everything."""
        raw = _as_bytes(data)
        path = self.resolve(name)
        idx = self.find(path)
        if idx is None:
            if len(self.entries) >= MAX_FILES:
                raise FileSystemError("Disk full")
            if self.content_count >= MAX_CONTENTS:
                raise FileSystemError("Content storage full")
            idx = self.add(path, EntryType.FILE, 0)
            self.entries[idx].parent_idx = 0xFFFF
        entry = self.entries[idx]
        if entry.data is None and self.content_count >= MAX_CONTENTS:
            raise FileSystemError("Content storage full")
        entry.size = len(raw)
        entry.data = raw[:MAX_FILE_SIZE]
        self.save()

    def load_file_content(self, name: str, max_len: int) -> bytes:
        """Return at most ``max_len`` bytes of a file's content."""
        if max_len <= 0:
            raise ValueError("max_len must be positive")
        path = self.resolve(name)
        idx = self.find(path)
        if idx is None:
            raise FileSystemError(f"not found: {path}")
        return (self.entries[idx].data or b"")[:max_len]

    def save(self) -> None:
        """Write directory, file table, users and contents to disk."""
        disk = self.disk
        disk.write(CURDIR_LBA, _fixed(self.current_dir, MAX_PATH + 1)[:MAX_PATH])

        for i, entry in enumerate(self.entries[:MAX_FILES]):
            disk.write(DATA_START_LBA + i, entry.pack())
        for i in range(len(self.entries), LOADED_FILE_SLOTS):
            disk.write(DATA_START_LBA + i, b"")

        for i, user in enumerate(self.users[:MAX_USERS]):
            disk.write(USER_START_LBA + i, user.pack())
        for i in range(len(self.users), LOADED_USER_SLOTS):
            disk.write(USER_START_LBA + i, b"")

        for idx, entry in enumerate(self.entries):
            if entry.data is None:
                continue
            base = CONTENT_START_LBA + idx * SECTORS_PER_FILE
            needed = max(1, -(-len(entry.data) // SECTOR_SIZE))
            for s in range(SECTORS_PER_FILE):
                chunk = entry.data[s * SECTOR_SIZE:(s + 1) * SECTOR_SIZE] if s < needed else b""
                disk.write(base + s, chunk)

    def load(self) -> None:
        """Read directory, file table, users and contents from disk."""
        disk = self.disk
        sector = disk.read(CURDIR_LBA)
        if sector[:2] == b"C:":
            self.current_dir = _cstr(sector[:MAX_PATH])[: MAX_PATH - 1]

        self.entries = []
        for i in range(LOADED_FILE_SLOTS):
            sector = disk.read(DATA_START_LBA + i)
            if sector[0] == 0:
                break
            self.entries.append(FSEntry.unpack(sector))

        self.users = []
        for i in range(LOADED_USER_SLOTS):
            sector = disk.read(USER_START_LBA + i)
            if sector[0] != 0:
                self.users.append(UserEntry.unpack(sector))

        loaded = 0
        for idx, entry in enumerate(self.entries):
            if loaded >= MAX_CONTENTS:
                break
            if entry.size == 0 or entry.type != EntryType.FILE:
                continue
            base = CONTENT_START_LBA + idx * SECTORS_PER_FILE
            needed = min(max(1, -(-entry.size // SECTOR_SIZE)), SECTORS_PER_FILE)
            raw = b"".join(disk.read(base + s) for s in range(needed))
            entry.data = raw[: min(entry.size, MAX_FILE_SIZE)]
            loaded += 1

    def ensure_desktop(self) -> None:
        """Make sure the desktop folders and app shortcuts exist, then save."""
        for folder in (DESKTOP_DIR, APPLICATIONS_DIR):
            if self.find(folder, EntryType.DIR) is None and len(self.entries) < MAX_FILES:
                self.add(folder, EntryType.DIR, ATTR_DIR)
        for app in APP_SHORTCUTS:
            path = APPLICATIONS_DIR + app
            if self.find(path) is None and len(self.entries) < MAX_FILES:
                self.add(path, EntryType.FILE, ATTR_FILE)
        self.save()

    def init(self) -> None:
        """Reset, load from disk, add a default root user and the desktop."""
        self.entries = []
        self.users = []
        self.load()
        if not self.users:
            self.users.append(UserEntry.for_password("root", "root"))
        self.ensure_desktop()