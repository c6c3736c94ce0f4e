from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from brightctl.system.backlight import DEFAULT_BACKLIGHT_DIR

KNOWN_KEYS = ("backlight_dir", "state_dir")


class ConfigError(ValueError):
    pass


def load(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config {p}: {e.strerror}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e

    # An empty file means "all defaults".
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    validate(data)
    normalize(data)
    return data


def validate(cfg: dict[str, Any]) -> None:
    for key in cfg:
        if key not in KNOWN_KEYS:
            raise ConfigError(f"Unknown config key: {key}")

    for key in KNOWN_KEYS:
        if key not in cfg or cfg[key] is None:
            continue
        value = cfg[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{key} must be a non-empty path")


def normalize(cfg: dict[str, Any]) -> None:
    """Strip whitespace, expand ~ and fill defaults in place."""

    for key in KNOWN_KEYS:
        value = cfg.get(key)
        if value is None:
            cfg.pop(key, None)
            continue
        cfg[key] = str(Path(str(value).strip()).expanduser())

    cfg.setdefault("backlight_dir", str(DEFAULT_BACKLIGHT_DIR))
