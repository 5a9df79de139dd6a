from datetime import datetime

import pytest

from aurionshell.console import Console
from aurionshell.disk import SectorDisk
from aurionshell.filesystem import FileSystem, UserEntry
from aurionshell.session import Session
from aurionshell.textutil import Layout


@pytest.fixture
def session():
    fs = FileSystem(SectorDisk(None))
    return Session(Console(), fs, now=lambda: datetime(2024, 1, 2, 3, 4, 5), ticks=lambda: 42)


def test_full_path_joins_current_dir(session):
    assert session.full_path("a.txt") == "C:\\a.txt"
    session.fs.current_dir = "C:\\docs\\"
    assert session.full_path("b") == "C:\\docs\\b"


def test_full_path_is_capped(session):
    result = session.full_path("x" * 400)
    assert len(result) == 255
    assert result.startswith("C:\\")


def test_find_user(session):
    session.fs.users.append(UserEntry.for_password("root", "root"))
    session.fs.users.append(UserEntry.for_password("alice", "password"))
    assert session.find_user("root") == 0
    assert session.find_user("alice") == 1
    assert session.find_user("bob") is None


def test_processes_initial_table(session):
    procs = session.processes()
    assert [p.pid for p in procs] == [1, 2, 3, 4]
    assert [p.name for p in procs] == ["KERNEL", "SHELL", "NETSVC", "DISPSVC"]
    assert procs[0].state == "RUNNING"


def test_processes_is_live_list(session):
    procs = session.processes()
    procs.pop()
    assert len(session.processes()) == 3


def test_injected_clocks(session):
    assert session.ticks() == 42
    assert session.now().year == 2024


def test_defaults(session):
    assert session.current_user == "root"
    assert session.keyboard_layout is Layout.ENGLISH
    assert session.env["PATH"] == "/bin"
    assert list(session.env) == ["PATH", "HOME", "SHELL", "USER"]
    assert session.aliases == {}


def test_default_ticks_start_near_zero():
    s = Session(Console(), FileSystem(SectorDisk(None)))
    assert 0 <= s.ticks() < 18