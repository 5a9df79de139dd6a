"""File and directory commands of the shell."""

from __future__ import annotations

from .disk import DiskError
from .filesystem import (
    ATTR_DIR,
    ATTR_FILE,
    MAX_FILE_SIZE,
    MAX_FILENAME,
    MAX_FILES,
    EntryType,
    FileSystemError,
)
from .session import Session
from .textutil import hex32, next_token, to_uint

KEY_ESC = 27
KEY_CTRL_C = 3
KEY_CTRL_K = 11
KEY_BACKSPACE = 8

_NANO_HEADER = "\n=== NANO Editor ===\nFile: {name}\nESC=Save\n-------------------\n"


def _token(args: str, max_len: int = 64) -> tuple[str, str]:
    return next_token(args, max_len)


def _show(data: bytes) -> str:
    return data.decode("latin-1")


def mkdir(session: Session, args: str) -> int:
    """Create a directory under the current directory."""
    out = session.console.puts
    fs = session.fs
    name, _ = _token(args)
    if not name:
        out("Usage: MKDIR dirname\n")
        return -1
    if len(fs.entries) >= MAX_FILES:
        out("Error: Filesystem full\n")
        return -1
    path = session.full_path(name)
    if fs.find(path) is not None:
        out("Error: Already exists\n")
        return -1
    fs.add(path, EntryType.DIR, ATTR_DIR)
    fs.save()
    out(f"Directory created: {name}\n")
    return 0


def rmdir(session: Session, args: str) -> int:
    """Remove the directory whose full name is given."""
    out = session.console.puts
    name, _ = _token(args)
    if not name:
        out("Usage: RMDIR dirname\n")
        return -1
    try:
        session.fs.remove(name, EntryType.DIR)
    except FileSystemError:
        out("Error: Directory not found\n")
        return -1
    session.fs.save()
    out("Directory removed\n")
    return 0


def touch(session: Session, args: str) -> int:
    """Create an empty file in the current directory."""
    out = session.console.puts
    fs = session.fs
    name, _ = _token(args)
    if not name:
        out("Usage: TOUCH filename\n")
        return -1
    if len(fs.entries) >= MAX_FILES:
        out("Error: Filesystem full\n")
        return -1
    path = session.full_path(name)
    if fs.find(path) is not None:
        out("File already exists\n")
        return 0
    fs.add(path, EntryType.FILE, ATTR_FILE)
    fs.save()
    out(f"File created: {name}\n")
    return 0


def delete(session: Session, args: str) -> int:
    """Delete a file in the current directory."""
    out = session.console.puts
    name, _ = _token(args)
    if not name:
        out("Usage: DEL filename\n")
        return -1
    try:
        session.fs.remove(session.full_path(name), EntryType.FILE)
    except FileSystemError:
        out("Error: File not found\n")
        return -1
    session.fs.save()
    out("File deleted\n")
    return 0


def list_dir(session: Session, args: str) -> int:
    """List the direct children of the current directory."""
    out = session.console.puts
    cwd = session.fs.current_dir
    out(f"Directory of {cwd}\n\n")
    files = dirs = total = 0
    for entry in session.fs.entries:
        if not entry.name.startswith(cwd):
            continue
        rest = entry.name[len(cwd):]
        if not rest or "\\" in rest:
            continue
        if entry.type == EntryType.DIR:
            out("<DIR>      ")
            dirs += 1
        else:
            out(str(entry.size).ljust(11))
            files += 1
            total += entry.size
        out(f"{rest}\n")
    out(f"\n{files} file(s), {dirs} dir(s), {total & 0xFFFFFFFF} bytes\n")
    return 0


def cd(session: Session, args: str) -> int:
    """Change the current directory, or print it when no argument is given."""
    out = session.console.puts
    fs = session.fs
    name, _ = _token(args)
    if not name:
        out(f"{fs.current_dir}\n")
        return 0
    if name == "..":
        cwd = fs.current_dir
        if len(cwd) > 3:
            cut = cwd.rfind("\\", 0, len(cwd) - 1)
            if cut >= 0:
                fs.current_dir = cwd[: cut + 1]
        fs.save()
        return 0
    path = session.full_path(name)
    if fs.find(path, EntryType.DIR) is None:
        out("Directory not found\n")
        return -1
    fs.current_dir = path if path.endswith("\\") else path + "\\"
    fs.save()
    return 0


def pwd(session: Session, args: str) -> int:
    """Print the current directory."""
    session.console.puts(f"{session.fs.current_dir}\n")
    return 0


def cat(session: Session, args: str) -> int:
    """Print the contents of a file in the current directory."""
    out = session.console.puts
    fs = session.fs
    name, _ = _token(args)
    if not name:
        out("Usage: CAT filename\n")
        return -1
    idx = fs.find(session.full_path(name), EntryType.FILE)
    if idx is None:
        out("File not found\n")
        return -1
    entry = fs.entries[idx]
    if entry.size == 0:
        out("(empty file)\n")
        return 0
    out(f"Looking for file_idx={idx} in file_content_count={fs.content_count}\n")
    if not entry.data:
        out("(empty file)\n")
        return 0
    out(_show(entry.data))
    if not entry.data.endswith(b"\n"):
        out("\n")
    return 0


def nano(session: Session, args: str) -> int:
    """Edit a file interactively; ESC saves, Ctrl+C cancels, Ctrl+K clears.

    Running out of keyboard input ends editing as ESC would.
    """
    console = session.console
    out = console.puts
    fs = session.fs
    name, _ = _token(args)
    if not name:
        out("Usage: NANO filename\n")
        return -1
    path = session.full_path(name)
    idx = fs.find(path, EntryType.FILE)
    is_new = idx is None
    if idx is None:
        if len(fs.entries) >= MAX_FILES:
            out("Error: Filesystem full\n")
            return -1
        idx = fs.add(path, EntryType.FILE, ATTR_FILE)
    entry = fs.entries[idx]

    out(_NANO_HEADER.format(name=name))
    limit = MAX_FILE_SIZE - 1
    buf: list[str] = []
    if entry.data and entry.size > 0:
        buf = list(_show(entry.data[:limit]))
        out("".join(buf))
    else:
        out("[New file...]\n")

    while True:
        try:
            key = console.getkey() & 0xFF
        except EOFError:
            break
        if key == KEY_ESC:
            break
        if key == KEY_CTRL_C:
            out("\n^C Cancelled\n")
            if is_new:
                fs.entries.pop(idx)
            return 0
        if key == KEY_CTRL_K:
            buf.clear()
            console.cls()
            out(_NANO_HEADER.format(name=name) + "[Cleared]\n")
        elif key == KEY_BACKSPACE:
            if buf:
                buf.pop()
                out("\b \b")
        elif 32 <= key <= 126 or key in (10, 13):
            ch = chr(key) if 32 <= key <= 126 else "\n"
            if len(buf) < limit:
                buf.append(ch)
                console.putc(ch)

    out("\n")
    if not buf:
        out("Empty - not saved\n")
        if is_new:
            fs.entries.pop(idx)
        return 0
    try:
        fs.set_content(path, "".join(buf).encode("latin-1"))
    except FileSystemError:
        out("Error: Too many files\n")
        if is_new:
            fs.entries.pop(idx)
        return -1
    try:
        fs.save()
    except DiskError:
        out("ERROR: Save failed!\n")
        return -1
    out(f"Saved {len(buf)} bytes to disk\n")
    out(f"Verifying: fs_table[{idx}].size = {entry.size} bytes\n")
    return 0


def copy(session: Session, args: str) -> int:
    """Copy a file, given by full names, to a new entry."""
    out = session.console.puts
    fs = session.fs
    src, rest = _token(args)
    dst, _ = _token(rest)
    if not src or not dst:
        out("Usage: COPY source dest\n")
        return -1
    src_idx = fs.find(src, EntryType.FILE)
    if src_idx is None:
        out("Source file not found\n")
        return -1
    if len(fs.entries) >= MAX_FILES:
        out("Error: Filesystem full\n")
        return -1
    source = fs.entries[src_idx]
    can_store = fs.content_count < 64
    dst_idx = fs.add(dst, EntryType.FILE, source.attr)
    target = fs.entries[dst_idx]
    target.size = source.size
    if source.data is not None and can_store:
        target.data = bytes(source.data)
    fs.save()
    out("File copied\n")
    return 0


def move(session: Session, args: str) -> int:
    """Rename an entry given by its full name."""
    out = session.console.puts
    fs = session.fs
    src, rest = _token(args)
    dst, _ = _token(rest)
    if not src or not dst:
        out("Usage: MOVE source dest\n")
        return -1
    idx = fs.find(src)
    if idx is None:
        out("File not found\n")
        return -1
    fs.entries[idx].name = dst[: MAX_FILENAME - 1]
    fs.save()
    out("File moved\n")
    return 0


def find(session: Session, args: str) -> int:
    """Print every entry whose full name contains the pattern."""
    out = session.console.puts
    pattern, _ = _token(args)
    if not pattern:
        out("Usage: FIND pattern\n")
        return -1
    matches = [e.name for e in session.fs.entries if pattern in e.name]
    for name in matches:
        out(f"{name}\n")
    if not matches:
        out("No files found\n")
    return 0


def tree(session: Session, args: str) -> int:
    """Print every entry in the filesystem."""
    out = session.console.puts
    out(f"Directory tree:\n{session.fs.current_dir}\n")
    for entry in session.fs.entries:
        tag = "[DIR] " if entry.type == EntryType.DIR else "[FILE] "
        out(f"  {tag}{entry.name}\n")
    return 0


def attrib(session: Session, args: str) -> int:
    """Show the attributes of one entry, or of all entries."""
    out = session.console.puts
    name, _ = _token(args)
    if not name:
        for entry in session.fs.entries:
            out(f"0x{hex32(entry.attr)} {entry.name}\n")
        return 0
    idx = session.fs.find(name)
    if idx is None:
        out("File not found\n")
    else:
        out(f"Attributes: 0x{hex32(session.fs.entries[idx].attr)}\n")
    return 0


def chmod(session: Session, args: str) -> int:
    """Set an entry's attribute byte from a decimal mode."""
    out = session.console.puts
    mode, rest = _token(args, 16)
    name, _ = _token(rest)
    if not mode or not name:
        out("Usage: CHMOD mode filename\n")
        return -1
    idx = session.fs.find(name)
    if idx is None:
        out("File not found\n")
        return -1
    session.fs.entries[idx].attr = to_uint(mode) & 0xFF
    session.fs.save()
    out("Attributes changed\n")
    return 0