"""User account and process commands of the shell."""

from __future__ import annotations

from .filesystem import MAX_USERS, UserEntry
from .session import Session
from .textutil import next_token, to_uint

KEY_BACKSPACE = 8
ENTER_KEYS = (10, 13)
NAME_LIMIT = 32
PASSWORD_LIMIT = 31
PROTECTED_PIDS = 2


def _username(args: str) -> str:
    name, _ = next_token(args, NAME_LIMIT)
    return name


def useradd(session: Session, args: str) -> int:
    """Add a user whose initial password is the user name."""
    out = session.console.puts
    name = _username(args)
    if not name:
        out("Usage: USERADD username\n")
        return -1
    if len(session.fs.users) >= MAX_USERS:
        out("Error: User table full\n")
        return -1
    if session.find_user(name) is not None:
        out("Error: User already exists\n")
        return -1
    session.fs.users.append(UserEntry.for_password(name, name))
    session.fs.save()
    out(f"User created: {name}\n")
    return 0


def userdel(session: Session, args: str) -> int:
    """Remove a user from the user table."""
    out = session.console.puts
    name = _username(args)
    if not name:
        out("Usage: USERDEL username\n")
        return -1
    idx = session.find_user(name)
    if idx is None:
        out("User not found\n")
        return -1
    del session.fs.users[idx]
    session.fs.save()
    out("User deleted\n")
    return 0


def _read_secret(session: Session) -> str:
    console = session.console
    typed: list[str] = []
    while True:
        try:
            key = console.getkey() & 0xFF
        except EOFError:
            break
        if key in ENTER_KEYS:
            break
        if key == KEY_BACKSPACE and typed:
            typed.pop()
        elif 32 <= key <= 126 and len(typed) < PASSWORD_LIMIT:
            typed.append(chr(key))
            console.putc("*")
    return "".join(typed)


def passwd(session: Session, args: str) -> int:
    """Read a new password from the keyboard and store its hash.

    Without an argument the current user's password is changed.
    """
    out = session.console.puts
    name = _username(args) or session.current_user[: NAME_LIMIT - 1]
    idx = session.find_user(name)
    if idx is None:
        out("User not found\n")
        return -1
    out("Enter new password: ")
    typed = _read_secret(session)
    out("\n")
    session.fs.users[idx] = UserEntry.for_password(name, typed)
    session.fs.save()
    out("Password changed\n")
    return 0


def users(session: Session, args: str) -> int:
    """List all user names."""
    out = session.console.puts
    out("System Users:\n")
    for user in session.fs.users:
        out(f"  {user.username}\n")
    out(f"\nTotal: {len(session.fs.users)} users\n")
    return 0


def login(session: Session, args: str) -> int:
    """Switch the current user to an existing account."""
    out = session.console.puts
    name = _username(args)
    if not name:
        out("Usage: LOGIN username\n")
        return -1
    if session.find_user(name) is None:
        out("User not found\n")
        return -1
    session.current_user = name
    out(f"Logged in as {name}\n")
    return 0


def logout(session: Session, args: str) -> int:
    """Return to the root account."""
    session.current_user = "root"
    session.console.puts("Logged out\n")
    return 0


def whoami(session: Session, args: str) -> int:
    """Print the current user name."""
    session.console.puts(f"{session.current_user}\n")
    return 0


def user_id(session: Session, args: str) -> int:
    """Print user and group ids."""
    session.console.puts(f"uid=0({session.current_user}) gid=0(root)\n")
    return 0


def ps(session: Session, args: str) -> int:
    """Print the process table."""
    out = session.console.puts
    out("PID  NAME            STATE       MEM   PRI\n")
    out("---  ----            -----       ---   ---\n")
    for proc in session.processes():
        out(
            str(proc.pid).ljust(5)
            + proc.name.ljust(16)
            + proc.state.ljust(12)
            + f"{proc.mem_usage}K".ljust(6)
            + f"{proc.priority}\n"
        )
    return 0


def kill(session: Session, args: str) -> int:
    """Remove a non-critical process from the process table."""
    out = session.console.puts
    pid_str, _ = next_token(args, 16)
    if not pid_str:
        out("Usage: KILL <pid>\n")
        return -1
    pid = to_uint(pid_str)
    table = session.processes()
    if pid <= PROTECTED_PIDS:
        out("Error: Cannot kill critical system process (KERNEL/SHELL)\n")
        return -1
    for idx, proc in enumerate(table):
        if proc.pid == pid:
            out(f"Terminating process {proc.name} (PID {pid_str})...\n")
            del table[idx]
            out("Process killed.\n")
            return 0
    out("Error: Process not found\n")
    return -1