import pytest

from aurionshell.disk import SECTOR_SIZE, DiskError, SectorDisk


def test_blank_sector_reads_zeros():
    disk = SectorDisk(None, 16)
    assert disk.read(3) == bytes(SECTOR_SIZE)


def test_write_then_read_pads_to_sector():
    disk = SectorDisk(None, 16)
    disk.write(5, b"hello")
    data = disk.read(5)
    assert len(data) == SECTOR_SIZE
    assert data.startswith(b"hello")
    assert data[5:] == bytes(SECTOR_SIZE - 5)


def test_oversized_write_rejected():
    disk = SectorDisk(None, 4)
    with pytest.raises(DiskError):
        disk.write(0, bytes(SECTOR_SIZE + 1))


@pytest.mark.parametrize("lba", [-1, 8, 100])
def test_out_of_range(lba):
    disk = SectorDisk(None, 8)
    with pytest.raises(DiskError):
        disk.read(lba)
    with pytest.raises(DiskError):
        disk.write(lba, b"x")


def test_file_image_persists(tmp_path):
    path = tmp_path / "disk.img"
    with SectorDisk(path, 64) as disk:
        disk.write(10, b"abc")
        assert disk.read(9) == bytes(SECTOR_SIZE)
    with SectorDisk(path, 64) as disk:
        assert disk.read(10)[:3] == b"abc"
        assert disk.read(50) == bytes(SECTOR_SIZE)


def test_closed_disk_raises():
    disk = SectorDisk(None, 4)
    with disk:
        disk.write(0, b"x")
    with pytest.raises(DiskError):
        disk.read(0)


def test_zero_sectors_invalid():
    with pytest.raises(ValueError):
        SectorDisk(None, 0)