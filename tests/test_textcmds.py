import pytest

from aurionshell import textcmds
from aurionshell.console import Console
from aurionshell.disk import SectorDisk
from aurionshell.filesystem import EntryType, FileSystem
from aurionshell.session import Session


@pytest.fixture
def session():
    fs = FileSystem(SectorDisk())
    return Session(Console(), fs, ticks=lambda: 0)


def _run(session, func, args):
    session.console.take()
    code = func(session, args)
    return code, session.console.take()


def test_wc_counts(session):
    text = "hello world\nfoo\n"
    session.fs.save_file_content("a.txt", text)
    code, out = _run(session, textcmds.wc, "a.txt")
    assert code == 0
    assert out == f"  {text.count(chr(10))}  3  {len(text)} a.txt\n"


def test_wc_missing_and_usage(session):
    assert _run(session, textcmds.wc, "nope") == (-1, "File not found\n")
    assert _run(session, textcmds.wc, "") == (-1, "Usage: WC <file>\n")


def test_wc_without_content(session):
    session.fs.add("C:\\e.txt", EntryType.FILE)
    assert _run(session, textcmds.wc, "e.txt") == (0, "  0  0  0 e.txt\n")


def test_head_and_tail(session):
    lines = [f"line{i}\n" for i in range(15)]
    session.fs.save_file_content("l.txt", "".join(lines))
    _, out = _run(session, textcmds.head, "l.txt")
    assert out == "".join(lines[:10])
    _, out = _run(session, textcmds.tail, "l.txt")
    assert out == "".join(lines[5:])


def test_head_short_file(session):
    session.fs.save_file_content("s.txt", "a\nb")
    assert _run(session, textcmds.head, "s.txt") == (0, "a\nb")


def test_grep(session):
    session.fs.save_file_content("g.txt", "apple\nbanana\npineapple")
    code, out = _run(session, textcmds.grep, "apple g.txt")
    assert code == 0
    assert out == "apple\npineapple\n"
    assert _run(session, textcmds.grep, "apple")[0] == -1


def test_diff(session):
    session.fs.save_file_content("x", "same")
    session.fs.save_file_content("y", "same")
    session.fs.save_file_content("z", "other")
    session.fs.save_file_content("w", "diff!")
    assert _run(session, textcmds.diff, "C:\\x C:\\y")[1] == "Files are identical\n"
    assert _run(session, textcmds.diff, "C:\\x C:\\z")[1] == "Files differ in size\n"
    assert _run(session, textcmds.diff, "C:\\z C:\\w")[1] == "Files differ\n"
    assert _run(session, textcmds.diff, "C:\\x C:\\q") == (-1, "File not found: C:\\q\n")


def test_diff_both_empty(session):
    session.fs.add("C:\\a", EntryType.FILE)
    session.fs.add("C:\\b", EntryType.FILE)
    assert _run(session, textcmds.diff, "C:\\a C:\\b")[1] == "Files are identical (both empty)\n"


def test_xxd_row(session):
    session.fs.save_file_content("h.bin", b"AB\x01")
    _, out = _run(session, textcmds.xxd, "h.bin")
    line = out.splitlines()[0]
    assert line.startswith("00000000: 00000041 00000042 00000001 ")
    assert line.endswith(" AB.")


def test_xxd_limit(session):
    session.fs.save_file_content("big.bin", b"x" * 400)
    _, out = _run(session, textcmds.xxd, "big.bin")
    assert len(out.splitlines()) == 256 // 16


def test_nl(session):
    session.fs.save_file_content("n.txt", "a\nb\n")
    assert _run(session, textcmds.nl, "n.txt") == (0, "  1  a\n  2  b\n")


def test_tac(session):
    session.fs.save_file_content("t.txt", "one\ntwo\nthree")
    assert _run(session, textcmds.tac, "t.txt") == (0, "three\ntwo\none\n")


def test_strings(session):
    session.fs.save_file_content("s.bin", b"abcd\x00ef\x01ghijk")
    _, out = _run(session, textcmds.strings, "s.bin")
    assert out == "abcd\nefghijk\n"


def test_more_pauses(session):
    session.fs.save_file_content("m.txt", "x\n" * 30)
    session.console.feed(" ")
    _, out = _run(session, textcmds.more, "m.txt")
    assert out.count("--More--") == 1
    assert out.count("x\n") == 30


def test_file_type_and_stat(session):
    session.fs.save_file_content("f.txt", "abc")
    session.fs.add("C:\\dir\\", EntryType.DIR)
    assert _run(session, textcmds.file_type, "C:\\f.txt")[1] == "C:\\f.txt: regular file, 3 bytes\n"
    assert _run(session, textcmds.file_type, "C:\\dir\\")[1] == "C:\\dir\\: directory\n"
    assert _run(session, textcmds.file_type, "C:\\no") == (-1, "C:\\no: No such file\n")
    code, out = _run(session, textcmds.stat, "C:\\dir\\")
    assert code == 0
    assert "  Type: directory\n" in out
    assert "  Attr: 0x00000010\n" in out
    assert _run(session, textcmds.stat, "zz") == (-1, "stat: cannot stat 'zz'\n")