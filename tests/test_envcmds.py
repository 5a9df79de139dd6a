import pytest

from aurionshell import envcmds
from aurionshell.console import Console
from aurionshell.disk import SectorDisk
from aurionshell.filesystem import EntryType, FileSystem
from aurionshell.session import MAX_ALIASES, Session


@pytest.fixture
def session():
    fs = FileSystem(SectorDisk(None, sectors=4096))
    fs.init()
    return Session(Console(), fs)


def test_env_defaults(session):
    envcmds.env(session, "")
    lines = session.console.take().splitlines()
    assert lines[0] == "PATH=/bin"
    assert "HOME=C:\\" in lines
    assert "SHELL=/bin/sh" in lines
    assert "USER=root" in lines


def test_export_sets_variable(session):
    assert envcmds.export(session, " FOO=bar") == 0
    assert session.env["FOO"] == "bar"
    envcmds.env(session, "")
    assert "FOO=bar\n" in session.console.take()


def test_export_overwrites(session):
    envcmds.export(session, "PATH=/usr")
    assert session.env["PATH"] == "/usr"
    assert list(session.env).count("PATH") == 1


def test_export_without_equals(session):
    assert envcmds.export(session, "FOO") == -1
    assert session.console.take() == "Usage: EXPORT KEY=value\n"
    assert "FOO" not in session.env


def test_export_no_args_lists(session):
    envcmds.export(session, "")
    assert session.console.take().startswith("PATH=/bin\n")


def test_unset(session):
    assert envcmds.unset(session, "HOME") == 0
    assert "HOME" not in session.env
    assert envcmds.unset(session, "") == -1
    assert session.console.take() == "Usage: UNSET <var>\n"


def test_path_prints_first_value(session):
    envcmds.path(session, "")
    assert session.console.take() == "/bin\n"


def test_alias_define_and_list(session):
    assert envcmds.alias(session, "ll=dir") == 0
    envcmds.alias(session, "")
    assert session.console.take() == "alias ll='dir'\n"
    envcmds.unalias(session, "ll")
    assert session.aliases == {}


def test_alias_usage_and_limit(session):
    assert envcmds.alias(session, "broken") == -1
    for n in range(MAX_ALIASES + 3):
        envcmds.alias(session, f"a{n}=x")
    assert len(session.aliases) == MAX_ALIASES


def test_history(session):
    session.history.extend(["dir", "cd x"])
    envcmds.history(session, "")
    assert session.console.take() == "  1  dir\n  2  cd x\n"


def test_expr_addition(session):
    envcmds.expr(session, "2 + 3")
    assert session.console.take() == "5\n"


def test_expr_subtraction_wraps(session):
    envcmds.expr(session, "3 - 5")
    value = int(session.console.take())
    assert value + 5 == 3 + 2 ** 32


def test_expr_division_by_zero(session):
    envcmds.expr(session, "7 / 0")
    assert session.console.take() == "0\n"


def test_expr_single_number_and_usage(session):
    envcmds.expr(session, "42")
    assert session.console.take() == "42\n"
    assert envcmds.expr(session, "") == -1
    assert session.console.take() == "Usage: EXPR num op num\n"


def test_check_file_and_dir(session):
    session.fs.add("C:\\note.txt", EntryType.FILE)
    assert envcmds.check(session, "-f C:\\note.txt") == 0
    assert envcmds.check(session, "-d C:\\note.txt") == 1
    assert envcmds.check(session, "-d C:\\Desktop\\") == 0
    assert envcmds.check(session, "-f C:\\missing") == 1
    assert envcmds.check(session, "-x C:\\note.txt") == 1