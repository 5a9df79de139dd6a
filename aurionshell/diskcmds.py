"""Commands that report on or manage the whole disk."""

from __future__ import annotations

from .disk import DiskError
from .filesystem import MAX_FILES
from .session import Session
from .textutil import next_token

DISK_BYTES = 1440 * 1024
UINT32_MASK = 0xFFFFFFFF


def _total_size(session: Session) -> int:
    return sum(entry.size for entry in session.fs.entries) & UINT32_MASK


def chkdsk(session: Session, args: str) -> int:
    """Report the number of files and their total size."""
    out = session.console.puts
    out("Checking disk...\n")
    out(f"Files: {len(session.fs.entries)}/{MAX_FILES}\n")
    out(f"Total size: {_total_size(session)} bytes\n")
    out("Disk check complete - no errors found\n")
    return 0


def format_disk(session: Session, args: str) -> int:
    """Erase every file after a Y confirmation."""
    console = session.console
    out = console.puts
    out("WARNING: This will erase all data!\n")
    out("Press Y to confirm or any key to cancel: ")
    try:
        key = console.getkey() & 0xFF
    except EOFError:
        key = None
    if key is not None:
        console.putc(chr(key))
    out("\n")
    if key in (ord("Y"), ord("y")):
        session.fs.entries.clear()
        session.fs.save()
        out("Format complete\n")
    else:
        out("Format cancelled\n")
    return 0


def df(session: Session, args: str) -> int:
    """Show used and free space of the volume."""
    out = session.console.puts
    used = _total_size(session)
    avail = ((DISK_BYTES - used) & UINT32_MASK) // 1024
    pct = ((used * 100) & UINT32_MASK) // DISK_BYTES
    out("Filesystem    Size   Used   Avail  Use%  Mounted on\n")
    out("C:\\          1440K  ")
    out(f"{used // 1024}K   {avail}K   {pct}%    /\n")
    return 0


def du(session: Session, args: str) -> int:
    """Show the size of one entry, or of every entry with a total."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        for entry in session.fs.entries:
            out(f"{entry.size}\t{entry.name}\n")
        out(f"{_total_size(session)}\ttotal\n")
        return 0
    idx = session.fs.find(name)
    if idx is None:
        out(f"du: cannot access '{name}'\n")
    else:
        out(f"{session.fs.entries[idx].size}\t{name}\n")
    return 0


def mount(session: Session, args: str) -> int:
    """List the mounted filesystems."""
    out = session.console.puts
    out("Mounted filesystems:\n")
    out("  C:\\    AurionFS    rw,relatime    (LBA 500+)\n")
    out("  /dev   devfs       rw,nosuid      (devices)\n")
    if session.processes():
        out("  /proc  procfs      ro,nosuid      (processes)\n")
    out("  A:\\    FAT12       ro             (removable)\n")
    return 0


def umount(session: Session, args: str) -> int:
    """Refuse to unmount; explain why for the known mount points."""
    out = session.console.puts
    point, _ = next_token(args, 64)
    if not point:
        out("Usage: UMOUNT <mountpoint>\n")
        return -1
    if point in ("C:\\", "C:", "/"):
        out("umount: C:\\ is busy (root filesystem)\n")
    elif point in ("/dev", "/proc"):
        out(f"umount: {point} is a kernel-reserved virtual mountpoint\n")
    else:
        out(f"umount: {point}: not mounted\n")
    return -1


def sync(session: Session, args: str) -> int:
    """Write the filesystem to disk."""
    out = session.console.puts
    out("Syncing cached data to disk...\n")
    try:
        session.fs.save()
    except DiskError:
        out("Error: Sync failed (disk write error).\n")
        return -1
    out("Filesystem synchronized (AurionFS LBA 500+).\n")
    return 0


def vol(session: Session, args: str) -> int:
    """Show the volume label and serial number."""
    out = session.console.puts
    out("Volume in drive C has no label\n")
    out("Volume Serial Number is 1234-5678\n")
    return 0


def diskpart(session: Session, args: str) -> int:
    """Show the partition layout."""
    out = session.console.puts
    out("Disk Information:\n")
    out("Disk 0: Primary disk\n")
    out("  Partition 1: C: (Active)\n")
    out("  Type: FAT12\n")
    out("  Size: 1.44 MB\n")
    return 0