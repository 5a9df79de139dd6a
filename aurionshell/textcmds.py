"""Commands that inspect and print the contents of files."""

from __future__ import annotations

from typing import Optional

from .filesystem import EntryType, FSEntry
from .session import Session
from .textutil import hex32, next_token

MORE_PAGE_LINES = 24
HEAD_LINES = 10
TAIL_LINES = 10
XXD_LIMIT = 256
XXD_ROW = 16
TAC_MAX_LINES = 128


def _show(data: bytes) -> str:
    return data.decode("latin-1")


def _locate(session: Session, name: str, kind: Optional[int] = None) -> Optional[FSEntry]:
    """Return the entry for ``name`` in the current directory, if present."""
    idx = session.fs.find(session.full_path(name), kind)
    return None if idx is None else session.fs.entries[idx]


def _last_index(session: Session, name: str) -> Optional[int]:
    found = None
    for idx, entry in enumerate(session.fs.entries):
        if entry.name == name:
            found = idx
    return found


def wc(session: Session, args: str) -> int:
    """Print line, word and character counts of a file."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: WC <file>\n")
        return -1
    entry = _locate(session, name, EntryType.FILE)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        out(f"  0  0  0 {name}\n")
        return 0
    text = _show(entry.data)
    lines = words = 0
    in_word = False
    for ch in text:
        if ch == "\n":
            lines += 1
        if ch in " \n\t":
            if in_word:
                words += 1
            in_word = False
        else:
            in_word = True
    if in_word:
        words += 1
    out(f"  {lines}  {words}  {len(text)} {name}\n")
    return 0


def head(session: Session, args: str) -> int:
    """Print the first ten lines of a file."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: HEAD <file> [n]\n")
        return -1
    entry = _locate(session, name, EntryType.FILE)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        return 0
    parts = _show(entry.data).split("\n")
    if len(parts) > HEAD_LINES:
        out("\n".join(parts[:HEAD_LINES]) + "\n")
    else:
        out("\n".join(parts))
    return 0


def tail(session: Session, args: str) -> int:
    """Print the last ten lines of a file."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: TAIL <file>\n")
        return -1
    entry = _locate(session, name, EntryType.FILE)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        return 0
    text = _show(entry.data)
    skip = max(text.count("\n") - TAIL_LINES, 0)
    out("\n".join(text.split("\n")[skip:]))
    return 0


def grep(session: Session, args: str) -> int:
    """Print the lines of a file that contain a pattern."""
    out = session.console.puts
    pattern, rest = next_token(args, 64)
    name, _ = next_token(rest, 64)
    if not pattern or not name:
        out("Usage: GREP <pattern> <file>\n")
        return -1
    entry = _locate(session, name, EntryType.FILE)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        return 0
    for line in _show(entry.data).split("\n"):
        if pattern in line:
            out(f"{line}\n")
    return 0


def diff(session: Session, args: str) -> int:
    """Tell whether two files, given by full names, have the same content."""
    out = session.console.puts
    first, rest = next_token(args, 64)
    second, _ = next_token(rest, 64)
    if not first or not second:
        out("Usage: DIFF <file1> <file2>\n")
        return -1
    i1 = _last_index(session, first)
    i2 = _last_index(session, second)
    if i1 is None:
        out(f"File not found: {first}\n")
        return -1
    if i2 is None:
        out(f"File not found: {second}\n")
        return -1
    d1 = session.fs.entries[i1].data
    d2 = session.fs.entries[i2].data
    if d1 is None and d2 is None:
        out("Files are identical (both empty)\n")
    elif d1 is None or d2 is None:
        out("Files differ\n")
    elif len(d1) != len(d2):
        out("Files differ in size\n")
    elif d1 != d2:
        out("Files differ\n")
    else:
        out("Files are identical\n")
    return 0


def _signed(b: int) -> int:
    return b - 256 if b >= 128 else b


def xxd(session: Session, args: str) -> int:
    """Hex dump the first 256 bytes of a file."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: XXD <file>\n")
        return -1
    entry = _locate(session, name)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        out("(empty file)\n")
        return 0
    data = entry.data[:XXD_LIMIT]
    for offset in range(0, len(data), XXD_ROW):
        row = data[offset:offset + XXD_ROW]
        cells = [hex32(_signed(b)) for b in row]
        cells += ["  "] * (XXD_ROW - len(row))
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in row)
        out(f"{hex32(offset)}: " + "".join(c + " " for c in cells) + " " + ascii_part + "\n")
    return 0


def nl(session: Session, args: str) -> int:
    """Print a file with its lines numbered."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: NL <file>\n")
        return -1
    entry = _locate(session, name)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        return 0
    text = _show(entry.data)
    line = 1
    out(f"  {line}  ")
    for pos, ch in enumerate(text):
        out(ch)
        if ch == "\n" and pos + 1 < len(text):
            line += 1
            out(f"  {line}  ")
    return 0


def tac(session: Session, args: str) -> int:
    """Print a file's lines in reverse order."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: TAC <file>\n")
        return -1
    entry = _locate(session, name)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        return 0
    text = _show(entry.data)
    starts = [0]
    for pos, ch in enumerate(text):
        if ch == "\n" and pos + 1 < len(text) and len(starts) < TAC_MAX_LINES:
            starts.append(pos + 1)
    ends = starts[1:] + [len(text)]
    for start, end in reversed(list(zip(starts, ends))):
        segment = text[start:end]
        out(segment)
        if not segment.endswith("\n"):
            out("\n")
    return 0


def strings(session: Session, args: str) -> int:
    """Print the printable characters of a file, breaking after long runs."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: STRINGS <file>\n")
        return -1
    entry = _locate(session, name)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        return 0
    run = 0
    for b in entry.data:
        if 32 <= b < 127:
            out(chr(b))
            run += 1
        else:
            if run >= 4:
                out("\n")
            run = 0
    if run >= 4:
        out("\n")
    return 0


def more(session: Session, args: str) -> int:
    """Print a file, pausing for a key after every 24 lines.

    When no keyboard input is left the listing simply continues.
    """
    console = session.console
    out = console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: MORE <file>\n")
        return -1
    entry = _locate(session, name)
    if entry is None:
        out("File not found\n")
        return -1
    if entry.data is None:
        out("(empty)\n")
        return 0
    lines = 0
    for ch in _show(entry.data):
        console.putc(ch)
        if ch == "\n":
            lines += 1
            if lines % MORE_PAGE_LINES == 0:
                out("--More--")
                try:
                    console.getkey()
                except EOFError:
                    pass
                out("\r        \r")
    return 0


def file_type(session: Session, args: str) -> int:
    """Describe an entry given by its full name."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: FILE <filename>\n")
        return -1
    idx = session.fs.find(name)
    if idx is None:
        out(f"{name}: No such file\n")
        return -1
    entry = session.fs.entries[idx]
    if entry.type == EntryType.DIR:
        out(f"{name}: directory\n")
    else:
        out(f"{name}: regular file, {entry.size} bytes\n")
    return 0


def stat(session: Session, args: str) -> int:
    """Show size, type and attributes of an entry given by its full name."""
    out = session.console.puts
    name, _ = next_token(args, 64)
    if not name:
        out("Usage: STAT <filename>\n")
        return -1
    idx = session.fs.find(name)
    if idx is None:
        out(f"stat: cannot stat '{name}'\n")
        return -1
    entry = session.fs.entries[idx]
    kind = "directory" if entry.type else "regular file"
    out(f"  File: {name}\n")
    out(f"  Size: {entry.size} bytes\n")
    out(f"  Type: {kind}\n")
    out(f"  Attr: 0x{hex32(entry.attr)}\n")
    return 0