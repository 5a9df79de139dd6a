"""Sector-addressed disk image, backed by a file or by memory."""

from __future__ import annotations

import os
from typing import BinaryIO, Optional

SECTOR_SIZE = 512
DEFAULT_SECTORS = 100 * 1024 * 1024 // SECTOR_SIZE


class DiskError(Exception):
    """Raised when a sector cannot be read or written."""


class SectorDisk:
    """A disk of fixed-size sectors addressed by LBA.

    With ``path`` set to ``None`` the sectors live in memory. Otherwise the
    image file is opened (and created when missing); sectors past the end of
    the file read back as zeros.
    """

    def __init__(self, path: Optional[str | os.PathLike] = None,
                 sectors: int = DEFAULT_SECTORS) -> None:
        if sectors <= 0:
            raise ValueError("a disk needs at least one sector")
        self.sectors = sectors
        self._memory: Optional[dict[int, bytes]] = None
        self._file: Optional[BinaryIO] = None
        self._closed = False
        if path is None:
            self._memory = {}
        else:
            mode = "r+b" if os.path.exists(path) else "w+b"
            try:
                self._file = open(path, mode)
            except OSError as exc:
                raise DiskError(f"cannot open disk image {path}: {exc}") from exc

    def _check(self, lba: int) -> None:
        if self._closed:
            raise DiskError("disk is closed")
        if not 0 <= lba < self.sectors:
            raise DiskError(f"LBA {lba} out of range (0..{self.sectors - 1})")

    def read(self, lba: int) -> bytes:
        """Return the 512 bytes stored at ``lba``."""
        self._check(lba)
        if self._memory is not None:
            return self._memory.get(lba, bytes(SECTOR_SIZE))
        assert self._file is not None
        try:
            self._file.seek(lba * SECTOR_SIZE)
            data = self._file.read(SECTOR_SIZE)
        except OSError as exc:
            raise DiskError(f"read of LBA {lba} failed: {exc}") from exc
        return data.ljust(SECTOR_SIZE, b"\0")

    def write(self, lba: int, data: bytes) -> None:
        """Store ``data`` at ``lba``, padding it with zeros to a full sector."""
        self._check(lba)
        data = bytes(data)
        if len(data) > SECTOR_SIZE:
            raise DiskError(f"sector data is {len(data)} bytes, more than {SECTOR_SIZE}")
        data = data.ljust(SECTOR_SIZE, b"\0")
        if self._memory is not None:
            self._memory[lba] = data
            return
        assert self._file is not None
        try:
            self._file.seek(lba * SECTOR_SIZE)
            self._file.write(data)
            self._file.flush()
        except OSError as exc:
            raise DiskError(f"write of LBA {lba} failed: {exc}") from exc

    def close(self) -> None:
        """Release the image; further access raises :class:`DiskError`."""
        if self._file is not None:
            self._file.close()
            self._file = None
        self._closed = True

    def __enter__(self) -> "SectorDisk":
        return self

    def __exit__(self, *args) -> None:
        self.close()