"""Environment, alias, history and expression commands of the shell."""

from __future__ import annotations

from .filesystem import EntryType
from .session import MAX_ALIASES, MAX_ENV_VARS, MAX_HISTORY, Session
from .textutil import next_token, to_uint

UINT32_MASK = 0xFFFFFFFF
KEY_LIMIT = 31
VALUE_LIMIT = 63


def _signed32(n: int) -> int:
    n &= UINT32_MASK
    return n - (1 << 32) if n & 0x80000000 else n


def _assign(table: dict[str, str], token: str, limit: int) -> bool:
    """Store ``KEY=value`` from ``token`` in ``table``; False if no '='."""
    key, sep, value = token.partition("=")
    if not sep:
        return False
    key = key[:KEY_LIMIT]
    if key in table or len(table) < limit:
        table[key] = value[:VALUE_LIMIT]
    return True


def env(session: Session, args: str) -> int:
    """Print all environment variables."""
    for key, value in session.env.items():
        session.console.puts(f"{key}={value}\n")
    return 0


def export(session: Session, args: str) -> int:
    """Set an environment variable from ``KEY=value``; list them without one."""
    token, rest = next_token(args, 96)
    if not token:
        return env(session, rest)
    if not _assign(session.env, token, MAX_ENV_VARS):
        session.console.puts("Usage: EXPORT KEY=value\n")
        return -1
    return 0


def unset(session: Session, args: str) -> int:
    """Remove an environment variable."""
    key, _ = next_token(args, 32)
    if not key:
        session.console.puts("Usage: UNSET <var>\n")
        return -1
    session.env.pop(key, None)
    return 0


def alias(session: Session, args: str) -> int:
    """Define ``name=command``, or list the aliases without an argument."""
    out = session.console.puts
    token, _ = next_token(args, 96)
    if not token:
        for name, command in session.aliases.items():
            out(f"alias {name}='{command}'\n")
        return 0
    if not _assign(session.aliases, token, MAX_ALIASES):
        out("Usage: ALIAS name=command\n")
        return -1
    return 0


def unalias(session: Session, args: str) -> int:
    """Remove an alias."""
    name, _ = next_token(args, 32)
    session.aliases.pop(name, None)
    return 0


def history(session: Session, args: str) -> int:
    """Print the recorded command lines, numbered from one."""
    for number, line in enumerate(session.history[:MAX_HISTORY], start=1):
        session.console.puts(f"  {number}  {line}\n")
    return 0


def path(session: Session, args: str) -> int:
    """Print the value of the first environment variable (PATH by default)."""
    first = next(iter(session.env.values()), "")
    session.console.puts(f"{first}\n")
    return 0


def expr(session: Session, args: str) -> int:
    """Evaluate ``num op num`` with 32-bit integer arithmetic.

    Division or remainder by zero yields 0; an unknown operator yields 0.
    """
    out = session.console.puts
    left, rest = next_token(args, 16)
    op, rest = next_token(rest, 4)
    right, _ = next_token(rest, 16)
    if not left:
        out("Usage: EXPR num op num\n")
        return -1
    if not op:
        out(f"{to_uint(left)}\n")
        return 0
    v1 = _signed32(to_uint(left))
    v2 = _signed32(to_uint(right))
    result = 0
    if op[0] == "+":
        result = v1 + v2
    elif op[0] == "-":
        result = v1 - v2
    elif op[0] == "*":
        result = v1 * v2
    elif op[0] == "/":
        if v2:
            quotient = abs(v1) // abs(v2)
            result = quotient if (v1 < 0) == (v2 < 0) else -quotient
    elif op[0] == "%":
        if v2:
            remainder = abs(v1) % abs(v2)
            result = -remainder if v1 < 0 else remainder
    out(f"{result & UINT32_MASK}\n")
    return 0


def check(session: Session, args: str) -> int:
    """Test ``-f name`` (file exists) or ``-d name`` (directory exists).

    Returns 0 when the test holds and 1 otherwise.
    """
    flag, rest = next_token(args, 16)
    kinds = {"-f": EntryType.FILE, "-d": EntryType.DIR}
    if flag not in kinds:
        return 1
    name, _ = next_token(rest, 64)
    return 0 if session.fs.find(name, kinds[flag]) is not None else 1