from __future__ import annotations

import logging
from pathlib import Path

from brightctl.errors import IOFailure, NoSavedState
from brightctl.paths import APP_NAME
from brightctl.system.intfile import read_int, write_int

log = logging.getLogger(__name__)

STATE_FILE_NAME = "last_brightness"


def state_file(state_dir: str | Path) -> Path:
    return Path(state_dir) / APP_NAME / STATE_FILE_NAME


def save_state(value: int, state_dir: str | Path | None) -> Path:
    """Persist value as the last brightness, overwriting any previous one."""

    if state_dir is None or not str(state_dir):
        raise IOFailure("state path not set")

    path = state_file(state_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailure(f"couldn't create state directory {path.parent}: {e.strerror}") from e

    write_int(path, value)
    log.debug("saved brightness %d to %s", value, path)
    return path


def restore_state(state_dir: str | Path | None) -> int:
    if state_dir is None or not str(state_dir):
        raise NoSavedState("no saved brightness found (state path not set)")

    path = state_file(state_dir)
    try:
        return read_int(path)
    except FileNotFoundError:
        raise NoSavedState("no saved brightness found") from None
