import pytest

from aurionshell.disk import SectorDisk
from aurionshell.filesystem import (
    ENTRY_SIZE,
    MAX_FILE_SIZE,
    MAX_FILES,
    EntryType,
    FileSystem,
    FileSystemError,
    FSEntry,
    UserEntry,
)
from aurionshell.textutil import hash_string


@pytest.fixture
def disk():
    return SectorDisk(None, 4096)


@pytest.fixture
def fs(disk):
    return FileSystem(disk)


def test_entry_pack_roundtrip():
    entry = FSEntry("C:\\notes.txt", 42, EntryType.FILE, 0x20, 0xFFFF)
    raw = entry.pack()
    assert len(raw) == ENTRY_SIZE
    assert FSEntry.unpack(raw) == entry


def test_entry_name_truncated():
    entry = FSEntry("C:\\" + "a" * 100)
    back = FSEntry.unpack(entry.pack())
    assert len(back.name) == 55
    assert entry.name.startswith(back.name)


def test_user_roundtrip_and_hash():
    user = UserEntry.for_password("alice", "password")
    assert int.from_bytes(user.password_hash[:4], "little") == hash_string("password")
    assert user.password_hash == user.password_hash[:4] * 8
    assert UserEntry.unpack(user.pack()) == user


def test_resolve(fs):
    assert fs.resolve("a.txt") == "C:\\a.txt"
    assert fs.resolve("D:\\x") == "D:\\x"
    fs.current_dir = "C:\\Docs\\"
    assert fs.resolve("b") == "C:\\Docs\\b"


def test_add_find_remove(fs):
    idx = fs.add("C:\\dir", EntryType.DIR)
    assert fs.entries[idx].attr == 0x10
    assert fs.find("C:\\dir", EntryType.DIR) == idx
    assert fs.find("C:\\dir", EntryType.FILE) is None
    removed = fs.remove("C:\\dir")
    assert removed.name == "C:\\dir"
    assert fs.entries == []
    with pytest.raises(FileSystemError):
        fs.remove("C:\\dir")


def test_add_when_full(fs):
    for i in range(MAX_FILES):
        fs.add(f"C:\\f{i}")
    with pytest.raises(FileSystemError):
        fs.add("C:\\extra")


def test_save_and_load_file_content(fs):
    fs.save_file_content("hello.txt", b"hello world")
    assert fs.load_file_content("hello.txt", 100) == b"hello world"
    assert fs.load_file_content("hello.txt", 5) == b"hello"
    entry = fs.entries[fs.find("C:\\hello.txt")]
    assert entry.parent_idx == 0xFFFF
    assert entry.size == len(b"hello world")


def test_load_missing_file(fs):
    with pytest.raises(FileSystemError):
        fs.load_file_content("nope", 10)
    with pytest.raises(ValueError):
        fs.load_file_content("nope", 0)


def test_content_truncated(fs):
    fs.save_file_content("big", b"x" * (MAX_FILE_SIZE + 300))
    assert len(fs.content("C:\\big")) == MAX_FILE_SIZE


def test_persistence_roundtrip(disk, fs):
    fs.add("C:\\Docs\\", EntryType.DIR)
    fs.save_file_content("a.txt", b"alpha")
    fs.save_file_content("b.txt", b"B" * 700)
    fs.users.append(UserEntry.for_password("bob", "secret"))
    fs.current_dir = "C:\\Docs\\"
    fs.save()

    other = FileSystem(disk)
    other.load()
    assert other.entries == fs.entries
    assert other.content("C:\\a.txt") == b"alpha"
    assert other.content("C:\\b.txt") == b"B" * 700
    assert other.users == fs.users
    assert other.current_dir == "C:\\Docs\\"


def test_content_sector_location(disk, fs):
    fs.save_file_content("a.txt", b"alpha")
    idx = fs.find("C:\\a.txt")
    assert disk.read(700 + idx * 16).startswith(b"alpha")
    assert disk.read(499).startswith(b"C:\\")


def test_set_content(fs):
    fs.add("C:\\n.txt")
    fs.set_content("C:\\n.txt", "text")
    assert fs.content("C:\\n.txt") == b"text"
    assert fs.entries[0].size == 4
    with pytest.raises(FileSystemError):
        fs.set_content("C:\\missing", b"x")


def test_init_blank_disk(disk, fs):
    fs.init()
    assert [u.username for u in fs.users] == ["root"]
    names = [e.name for e in fs.entries]
    assert names[:2] == ["C:\\Desktop\\", "C:\\Desktop\\Applications\\"]
    assert "C:\\Desktop\\Applications\\System Info" in names
    assert fs.entries[0].type == EntryType.DIR

    again = FileSystem(disk)
    again.init()
    assert [e.name for e in again.entries] == names


def test_removed_entry_not_reloaded(disk, fs):
    fs.add("C:\\one")
    fs.add("C:\\two")
    fs.save()
    fs.remove("C:\\one")
    fs.save()
    other = FileSystem(disk)
    other.load()
    assert [e.name for e in other.entries] == ["C:\\two"]