from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from pathlib import Path

from brightctl.brightness import BrightnessDevice
from brightctl.errors import CorruptValue, DeviceNotFound, IOFailure, ListFailed
from brightctl.system.intfile import read_int, write_int

log = logging.getLogger(__name__)

DEFAULT_BACKLIGHT_DIR = Path("/sys/class/backlight")


class BrightnessStore(abc.ABC):
    """Somewhere a single brightness integer lives."""

    @abc.abstractmethod
    def read(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def write(self, value: int) -> None:
        raise NotImplementedError


class FileStore(BrightnessStore):
    def __init__(self, path: str | Path, create: bool = False):
        self.path = Path(path)
        self._create = create

    def read(self) -> int:
        try:
            return read_int(self.path)
        except FileNotFoundError as e:
            raise IOFailure(f"failed to read file {self.path}: {e.strerror}") from e

    def write(self, value: int) -> None:
        write_int(self.path, value, create=self._create)


class MemoryStore(BrightnessStore):
    def __init__(self, value: int = 0):
        self.value = value
        self.writes: list[int] = []

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = int(value)
        self.writes.append(self.value)


def discover(base_dir: str | Path) -> str:
    """Return the name of the first device directory under base_dir.

    Entries are visited in name order. Symlinks resolving to directories count,
    which is how /sys/class/backlight exposes devices.
    """

    base = Path(base_dir)
    try:
        entries = sorted(base.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ListFailed(f"failed to list {base}: {e.strerror or e}") from e

    for entry in entries:
        try:
            if entry.is_dir():
                log.debug("using backlight device %s", entry.name)
                return entry.name
        except OSError:
            continue

    raise DeviceNotFound(f"no backlight device found in {base}")


@dataclass(frozen=True)
class Backlight:
    sysfs_dir: Path

    @property
    def name(self) -> str:
        return self.sysfs_dir.name

    @property
    def _brightness(self) -> Path:
        return self.sysfs_dir / "brightness"

    @property
    def _max_brightness(self) -> Path:
        return self.sysfs_dir / "max_brightness"

    def current_store(self) -> BrightnessStore:
        return FileStore(self._brightness)

    def max_store(self) -> BrightnessStore:
        return FileStore(self._max_brightness)

    def load(self) -> BrightnessDevice:
        return load_device(self.name, self.current_store(), self.max_store())

    def write(self, device: BrightnessDevice) -> None:
        log.debug("writing %d to %s", device.current, self._brightness)
        self.current_store().write(device.current)


def load_device(name: str, current: BrightnessStore, maximum: BrightnessStore) -> BrightnessDevice:
    max_value = maximum.read()
    if max_value <= 0:
        raise CorruptValue(f"maximum brightness of {name} must be positive, got {max_value}")

    cur_value = current.read()
    device = BrightnessDevice(name=name, current=cur_value, maximum=max_value)
    if cur_value > max_value:
        log.debug("current brightness %d above maximum %d, clamping", cur_value, max_value)
        device = device.with_current(cur_value)
    return device


def load(base_dir: str | Path = DEFAULT_BACKLIGHT_DIR) -> tuple[Backlight, BrightnessDevice]:
    base = Path(base_dir)
    bl = Backlight(base / discover(base))
    return bl, bl.load()
