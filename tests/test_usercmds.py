import pytest

from aurionshell import usercmds
from aurionshell.console import Console
from aurionshell.disk import SectorDisk
from aurionshell.filesystem import FileSystem, UserEntry
from aurionshell.session import Session


@pytest.fixture
def disk():
    return SectorDisk(None, sectors=4096)


@pytest.fixture
def session(disk):
    fs = FileSystem(disk)
    fs.init()
    return Session(Console(), fs)


def test_default_root_user(session):
    assert [u.username for u in session.fs.users] == ["root"]


def test_useradd_creates_and_persists(session, disk):
    assert usercmds.useradd(session, " alice") == 0
    assert session.console.take() == "User created: alice\n"
    reloaded = FileSystem(disk)
    reloaded.load()
    names = [u.username for u in reloaded.users]
    assert "alice" in names
    stored = reloaded.users[names.index("alice")]
    assert stored.password_hash == UserEntry.for_password("alice", "alice").password_hash


def test_useradd_duplicate(session):
    usercmds.useradd(session, "bob")
    session.console.take()
    assert usercmds.useradd(session, "bob") == -1
    assert session.console.take() == "Error: User already exists\n"


def test_useradd_usage(session):
    assert usercmds.useradd(session, "   ") == -1
    assert session.console.take() == "Usage: USERADD username\n"


def test_userdel(session):
    usercmds.useradd(session, "carol")
    session.console.take()
    assert usercmds.userdel(session, "carol") == 0
    assert session.find_user("carol") is None
    assert session.console.take() == "User deleted\n"
    assert usercmds.userdel(session, "carol") == -1
    assert session.console.take() == "User not found\n"


def test_passwd_sets_hash(session):
    session.console.feed("secret\r")
    assert usercmds.passwd(session, "") == 0
    text = session.console.take()
    assert text.startswith("Enter new password: ******")
    assert text.endswith("Password changed\n")
    idx = session.find_user("root")
    expected = UserEntry.for_password("root", "secret").password_hash
    assert session.fs.users[idx].password_hash == expected


def test_passwd_backspace(session):
    session.console.feed("ab\bc\r")
    usercmds.passwd(session, "root")
    idx = session.find_user("root")
    assert session.fs.users[idx].password_hash == UserEntry.for_password("root", "ac").password_hash


def test_passwd_unknown_user(session):
    assert usercmds.passwd(session, "nobody") == -1
    assert session.console.take() == "User not found\n"


def test_users_lists_all(session):
    usercmds.useradd(session, "dave")
    session.console.take()
    usercmds.users(session, "")
    text = session.console.take()
    assert "  root\n" in text
    assert "  dave\n" in text
    assert text.endswith(f"\nTotal: {len(session.fs.users)} users\n")


def test_login_whoami_logout(session):
    usercmds.useradd(session, "erin")
    session.console.take()
    assert usercmds.login(session, "erin") == 0
    assert session.console.take() == "Logged in as erin\n"
    usercmds.whoami(session, "")
    assert session.console.take() == "erin\n"
    usercmds.user_id(session, "")
    assert session.console.take() == "uid=0(erin) gid=0(root)\n"
    usercmds.logout(session, "")
    assert session.current_user == "root"


def test_login_unknown(session):
    assert usercmds.login(session, "ghost") == -1
    assert session.current_user == "root"


def test_ps_lists_processes(session):
    usercmds.ps(session, "")
    lines = session.console.take().splitlines()
    assert len(lines) == 2 + len(session.processes())
    assert lines[2].startswith("1    KERNEL")
    assert lines[2].endswith("128K  0")


def test_kill_process(session):
    before = len(session.processes())
    assert usercmds.kill(session, "3") == 0
    assert session.console.take() == "Terminating process NETSVC (PID 3)...\nProcess killed.\n"
    assert len(session.processes()) == before - 1
    assert all(p.pid != 3 for p in session.processes())


def test_kill_protected_and_missing(session):
    assert usercmds.kill(session, "1") == -1
    assert "Cannot kill critical" in session.console.take()
    assert usercmds.kill(session, "99") == -1
    assert session.console.take() == "Error: Process not found\n"
    assert usercmds.kill(session, "") == -1