from __future__ import annotations

from pathlib import Path

import pytest

DEVICE = "bl_device"


@pytest.fixture
def sysfs(tmp_path: Path) -> Path:
    """A fake /sys/class/backlight with one device at 20/100."""

    base = tmp_path / "backlight"
    dev = base / DEVICE
    dev.mkdir(parents=True)
    (dev / "brightness").write_text("20\n", encoding="utf-8")
    (dev / "max_brightness").write_text("100\n", encoding="utf-8")
    return base


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    return tmp_path / "state"
