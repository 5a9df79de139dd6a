"""Everyday utility commands: echo, arithmetic, text tricks, clock and system info."""

from __future__ import annotations

from .session import TICKS_PER_SECOND, Session
from .textutil import (
    Layout,
    base64_encode,
    hash_string,
    hex32,
    next_token,
    prime_factors,
    to_uint,
)

UINT32_MASK = 0xFFFFFFFF
YES_REPEATS = 20
CAL_DAYS = 28

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_HELP = (
    "========================================================================\n"
    "AurionOS Available Commands:\n"
    "  File: DIR LS CD MKDIR RMDIR TOUCH DEL CAT NANO TYPE COPY MOVE REN FIND\n"
    "  Disk: CHKDSK FORMAT LABEL VOL DISKPART FSCK\n"
    "  Info: VER TIME DATE UPTIME MEM SYSINFO UNAME WHOAMI HOSTNAME\n"
    "  User: USERADD USERDEL PASSWD USERS LOGIN LOGOUT SU SUDO\n"
    "  Proc: PS KILL TOP TASKLIST TASKKILL\n"
    "  Misc: CLS CLEAR CLS-TERMINAL CLEAR-TERMINAL COLOR ECHO BEEP CALC\n"
    "        HEXDUMP ASCII HASH\n"
    "  Ctrl: REBOOT SHUTDOWN HALT PAUSE SLEEP EXIT\n"
    "  Network: NETSTART IPCONFIG PING WGET WIFITEST\n"
    "  Graphics: GUITEST CALC-GUI NOTEPAD PAINT FILEBROWSER CLOCK\n"
    "  Programming: PYTHON (Mini Python interpreter) MAKE\n"
    "========================================================================\n"
)

_COW = (
    "        \\   ^__^\n"
    "         \\  (oo)\\_______\n"
    "            (__)\\       )\\/\\\n"
    "                ||----w |\n"
    "                ||     ||\n"
)

_UNAME_ALL = "AurionOS rodos 1.0.0 i386 AurionOS/x86\n"
_UNAME = {"-s": "AurionOS\n", "-r": "1.0.0\n", "-m": "i386\n"}


def _rest(args: str) -> str:
    return args.lstrip(" \t")


def echo(session: Session, args: str) -> int:
    """Print the arguments."""
    session.console.puts(_rest(args) + "\n")
    return 0


def color(session: Session, args: str) -> int:
    """Set the text colour attribute from a decimal number."""
    out = session.console.puts
    tok, _ = next_token(args, 16)
    if not tok:
        out("Usage: COLOR <0-255>\n")
        out("Examples: COLOR 10 (green), COLOR 12 (red), COLOR 14 (yellow)\n")
        out("Format: Foreground + (Background * 16)\n")
        return -1
    if not tok[0].isdigit() or not "0" <= tok[0] <= "9":
        out("Usage: COLOR 0-255\n")
        return -1
    value = to_uint(tok) & 0xFF
    session.color = value
    session.console.set_attr(value)
    out(f"Color changed to {value}\n")
    return 0


def calc(session: Session, args: str) -> int:
    """Compute ``num op num`` with unsigned 32-bit arithmetic."""
    out = session.console.puts
    a_str, rest = next_token(args, 16)
    op, rest = next_token(rest, 4)
    b_str, _ = next_token(rest, 16)
    if not a_str or not op or not b_str:
        out("Usage: CALC num op num (e.g., CALC 5 + 3)\n")
        return -1
    a, b = to_uint(a_str), to_uint(b_str)
    if op[0] == "+":
        result = a + b
    elif op[0] == "-":
        result = a - b
    elif op[0] == "*":
        result = a * b
    elif op[0] == "/":
        if b == 0:
            out("Error: Division by zero\n")
            return -1
        result = a // b
    else:
        out("Unknown operator\n")
        return -1
    out(f"Result: {result & UINT32_MASK}\n")
    return 0


def hash_text(session: Session, args: str) -> int:
    """Print the 32-bit hash of the rest of the line."""
    out = session.console.puts
    text = _rest(args)
    if not text:
        out("Usage: HASH string\n")
        return -1
    out(f"Hash: 0x{hex32(hash_string(text))}\n")
    return 0


def base64(session: Session, args: str) -> int:
    """Print the base64 encoding of the rest of the line."""
    out = session.console.puts
    text = _rest(args)
    if not text:
        out("Usage: BASE64 <text>\n")
        return -1
    out(base64_encode(text) + "\n")
    return 0


def rev(session: Session, args: str) -> int:
    """Print the rest of the line reversed."""
    out = session.console.puts
    text = _rest(args)
    if not text:
        out("Usage: REV <text>\n")
        return -1
    out(text[::-1] + "\n")
    return 0


def factor(session: Session, args: str) -> int:
    """Print the prime factorisation of a number."""
    out = session.console.puts
    tok, _ = next_token(args, 16)
    if not tok:
        out("Usage: FACTOR <number>\n")
        return -1
    n = to_uint(tok)
    out(f"{n}:" + "".join(f" {p}" for p in prime_factors(n)) + "\n")
    return 0


def seq(session: Session, args: str) -> int:
    """Print ``start..end``; with one number print ``1..number``."""
    out = session.console.puts
    first, rest = next_token(args, 16)
    second, _ = next_token(rest, 16)
    if not first:
        out("Usage: SEQ <start> <end>\n")
        return -1
    if second:
        start, end = to_uint(first), to_uint(second)
    else:
        start, end = 1, to_uint(first)
    for i in range(start, end + 1):
        out(f"{i}\n")
    return 0


def yes(session: Session, args: str) -> int:
    """Repeat a text (default ``y``) twenty times."""
    out = session.console.puts
    text = _rest(args) or "y"
    for _ in range(YES_REPEATS):
        out(text + "\n")
    out(f"(stopped after {YES_REPEATS} lines)\n")
    return 0


def cowsay(session: Session, args: str) -> int:
    """Draw a cow saying the message (default ``moo``)."""
    out = session.console.puts
    msg = _rest(args) or "moo"
    bar = len(msg) + 2
    out(" " + "_" * bar + "\n")
    out(f"< {msg} >\n")
    out(" " + "-" * bar + "\n")
    out(_COW)
    return 0


def banner(session: Session, args: str) -> int:
    """Print the text framed in a box of hashes."""
    out = session.console.puts
    text = _rest(args)
    if not text:
        out("Usage: BANNER <text>\n")
        return -1
    out(f"####  {text}  ####\n")
    out("#     " + " " * len(text) + "     #\n")
    out(f"####  {text}  ####\n")
    return 0


def cal(session: Session, args: str) -> int:
    """Show a simple month view marking today."""
    out = session.console.puts
    now = session.now()
    if 1 <= now.month <= 12:
        out(MONTHS[now.month - 1])
    out(f" {now.year}\n")
    out("Su Mo Tu We Th Fr Sa\n")
    parts = []
    for d in range(1, CAL_DAYS + 1):
        parts.append(f"{d:>2}" + ("*" if d == now.day else " "))
        if d % 7 == 0:
            parts.append("\n")
    out("".join(parts) + "\n")
    return 0


def show_time(session: Session, args: str) -> int:
    """Print the current time as H:MM:SS."""
    now = session.now()
    session.console.puts(f"{now.hour}:{now.minute:02d}:{now.second:02d}\n")
    return 0


def show_date(session: Session, args: str) -> int:
    """Print the current date as YYYY-MM-DD."""
    now = session.now()
    session.console.puts(f"{now.year}-{now.month:02d}-{now.day:02d}\n")
    return 0


def uptime(session: Session, args: str) -> int:
    """Print the time since start-up in hours, minutes and seconds."""
    seconds = (session.ticks() & UINT32_MASK) // TICKS_PER_SECOND
    minutes = seconds // 60
    hours = minutes // 60
    session.console.puts(f"Uptime: {hours}h {minutes % 60}m {seconds % 60}s\n")
    return 0


def ascii_table(session: Session, args: str) -> int:
    """Print the printable ASCII characters with their codes."""
    out = session.console.puts
    out("ASCII Table (printable):\n")
    for code in range(32, 127):
        out(f"{code}: {chr(code)}  ")
        if (code - 31) % 8 == 0:
            out("\n")
    out("\n")
    return 0


def keyboard(session: Session, args: str) -> int:
    """Show or switch the keyboard layout (ENGLISH or SERBIAN)."""
    out = session.console.puts
    tok, _ = next_token(args, 32)
    tok = tok.upper()
    if not tok:
        out("Keyboard layout: ")
        out("English (default)\n" if session.keyboard_layout == Layout.ENGLISH
            else "Serbian Latin QWERTY\n")
        out("\nUsage:\n")
        out("  KEYBOARD ENGLISH   - switch to English layout\n")
        out("  KEYBOARD SERBIAN   - switch to Serbian Latin QWERTY\n")
        out("\nSerbien Latin key overrides (bracket cluster):\n")
        out("  [  ->  s (s-caron)     {  ->  S\n")
        out("  ]  ->  c (c-caron)     }  ->  C\n")
        out("  \\  ->  z (z-caron)     |  ->  Z\n")
        return 0
    if tok == "ENGLISH":
        session.keyboard_layout = Layout.ENGLISH
        out("Keyboard layout set to: English\n")
        return 0
    if tok == "SERBIAN":
        session.keyboard_layout = Layout.SERBIAN
        out("Keyboard layout set to: Serbian Latin QWERTY\n")
        out("Keys [ ] \\ now produce s c z (Serbian caron letters)\n")
        out("Uppercase: { } | produce S C Z\n")
        return 0
    out("Unknown layout. Use: KEYBOARD ENGLISH  or  KEYBOARD SERBIAN\n")
    return -1


def uname(session: Session, args: str) -> int:
    """Print system identification; -s, -r and -m select one field."""
    tok, _ = next_token(args, 16)
    session.console.puts(_UNAME.get(tok, _UNAME_ALL))
    return 0


def hostname(session: Session, args: str) -> int:
    """Print the host name; it cannot be changed."""
    tok, _ = next_token(args, 64)
    if tok:
        session.console.puts("hostname: cannot set hostname (read-only)\n")
    else:
        session.console.puts("rodos\n")
    return 0


def ver(session: Session, args: str) -> int:
    """Print the system version."""
    session.console.puts("AurionOS Version 1.0 Beta\n")
    session.console.puts("32-bit Protected Mode Operating System\n")
    return 0


def help_text(session: Session, args: str) -> int:
    """Print the command overview."""
    session.console.puts(_HELP)
    return 0