from __future__ import annotations

import os
from pathlib import Path

import pytest

from brightctl.brightness import BrightnessDevice
from brightctl.errors import CorruptValue, DeviceNotFound, IOFailure, ListFailed
from brightctl.system import backlight
from brightctl.system.backlight import Backlight, FileStore, MemoryStore, discover, load_device
from brightctl.system.intfile import read_int, write_int

DEVICE = "bl_device"


def test_load_reads_device(sysfs: Path) -> None:
    bl, dev = backlight.load(sysfs)
    assert bl.sysfs_dir == sysfs / DEVICE
    assert dev == BrightnessDevice(name=DEVICE, current=20, maximum=100)


def test_discover_skips_plain_files(tmp_path: Path) -> None:
    (tmp_path / "aaa_not_a_device").write_text("x", encoding="utf-8")
    (tmp_path / "intel_backlight").mkdir()
    assert discover(tmp_path) == "intel_backlight"


def test_discover_picks_first_by_name(tmp_path: Path) -> None:
    (tmp_path / "b_dev").mkdir()
    (tmp_path / "a_dev").mkdir()
    assert discover(tmp_path) == "a_dev"


def test_discover_follows_symlinks(tmp_path: Path) -> None:
    real = tmp_path / "devices" / "acpi_video0"
    real.mkdir(parents=True)
    base = tmp_path / "backlight"
    base.mkdir()
    os.symlink(real, base / "acpi_video0")
    assert discover(base) == "acpi_video0"


def test_empty_dir_is_device_not_found(tmp_path: Path) -> None:
    with pytest.raises(DeviceNotFound, match="no backlight device found"):
        backlight.load(tmp_path)


def test_missing_dir_is_list_failed(tmp_path: Path) -> None:
    with pytest.raises(ListFailed, match="failed to list"):
        backlight.load(tmp_path / "nowhere")


def test_corrupt_brightness_names_path(sysfs: Path) -> None:
    path = sysfs / DEVICE / "brightness"
    path.write_text("bright\n", encoding="utf-8")
    with pytest.raises(CorruptValue) as exc:
        backlight.load(sysfs)
    assert str(path) in str(exc.value)
    assert "bright" in str(exc.value)


def test_missing_max_brightness_is_fatal(sysfs: Path) -> None:
    (sysfs / DEVICE / "max_brightness").unlink()
    with pytest.raises(IOFailure, match="max_brightness"):
        backlight.load(sysfs)


def test_zero_max_brightness_rejected() -> None:
    with pytest.raises(CorruptValue, match="must be positive"):
        load_device("dev", MemoryStore(0), MemoryStore(0))


def test_current_above_max_is_clamped() -> None:
    dev = load_device("dev", MemoryStore(250), MemoryStore(100))
    assert dev.current == 100


def test_write_rewrites_brightness(sysfs: Path) -> None:
    bl = Backlight(sysfs / DEVICE)
    bl.write(BrightnessDevice(name=DEVICE, current=3480, maximum=5000))
    assert (sysfs / DEVICE / "brightness").read_text(encoding="utf-8") == "3480"


def test_write_does_not_create_brightness(tmp_path: Path) -> None:
    dev_dir = tmp_path / DEVICE
    dev_dir.mkdir()
    bl = Backlight(dev_dir)
    with pytest.raises(IOFailure, match="failed to open"):
        bl.write(BrightnessDevice(name=DEVICE, current=1, maximum=10))
    assert not (dev_dir / "brightness").exists()


def test_file_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "brightness"
    path.write_text("0", encoding="utf-8")
    store = FileStore(path)
    store.write(42)
    assert store.read() == 42


def test_memory_store_records_writes() -> None:
    store = MemoryStore(5)
    store.write(7)
    store.write(9)
    assert store.read() == 9
    assert store.writes == [7, 9]


def test_read_int_trims_whitespace(tmp_path: Path) -> None:
    path = tmp_path / "v"
    path.write_text("  1200 \n", encoding="utf-8")
    assert read_int(path) == 1200


@pytest.mark.parametrize("content", ["", "-3", "12.5", "1_000", "0x10"])
def test_read_int_rejects_non_decimal(tmp_path: Path, content: str) -> None:
    path = tmp_path / "v"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(CorruptValue, match="expected number"):
        read_int(path)


def test_write_int_truncates_longer_content(tmp_path: Path) -> None:
    path = tmp_path / "v"
    path.write_text("123456\n", encoding="utf-8")
    write_int(path, 7)
    assert path.read_text(encoding="utf-8") == "7"
