from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from brightctl import __version__
from brightctl.brightness import BrightnessDevice, get_percentage, set_from_expression
from brightctl.config import ConfigError, load, normalize
from brightctl.errors import BrightnessError, IOFailure
from brightctl.logs import setup_logging
from brightctl.paths import default_state_dir
from brightctl.state import restore_state, save_state
from brightctl.system import backlight
from brightctl.system.backlight import Backlight

log = logging.getLogger(__name__)

EXAMPLES = """\
examples:
  brightctl set 50%
  brightctl set +5%
  brightctl set -5%
  brightctl get
  brightctl restore   (to use within a startup script)
"""


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="brightctl",
        description="Read and adjust the display backlight through sysfs.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-c", "--config", help="YAML file overriding backlight_dir/state_dir")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    sub = ap.add_subparsers(dest="cmd", required=True)

    set_ = sub.add_parser("set", help="Set brightness, absolute (50%%, 0.5) or relative (+5%%)")
    set_.add_argument("expr", help="Brightness expression, e.g. 50%%, +5%%, -0.05")

    sub.add_parser("get", help="Print the current brightness as a fraction of the maximum")
    sub.add_parser("restore", help="Reapply the last brightness set with 'set'")

    return ap


def _mark_expression(argv: list[str]) -> list[str]:
    # "-5%" looks like an option to argparse, so everything after "set" is
    # forced to be positional.
    out = list(argv)
    i = 0
    while i < len(out):
        arg = out[i]
        # -c FILE, --config FILE, or a short group ending in c such as -vc FILE
        if arg == "--config" or (arg[:1] == "-" and arg[1:2] != "-" and arg.endswith("c")):
            i += 2
            continue
        if arg.startswith("-"):
            i += 1
            continue
        if arg == "set" and out[i + 1 : i + 2] not in (["--"], ["-h"], ["--help"]):
            out.insert(i + 1, "--")
        break
    return out


def _settings(config_path: str | None) -> dict[str, Any]:
    if config_path:
        return load(config_path)
    cfg: dict[str, Any] = {}
    normalize(cfg)
    return cfg


def _resolve_state_dir(cfg: dict[str, Any]) -> Path | None:
    if cfg.get("state_dir"):
        return Path(cfg["state_dir"])
    return default_state_dir()


def cmd_set(
    bl: Backlight, device: BrightnessDevice, expr: str, state_dir: Path | None
) -> BrightnessDevice:
    updated = set_from_expression(device, expr)
    bl.write(updated)

    try:
        save_state(updated.current, state_dir)
    except BrightnessError as e:
        log.warning("can't save current brightness: %s", e)

    print("Brightness changed")
    return updated


def cmd_get(device: BrightnessDevice) -> float:
    value = get_percentage(device)
    print(f"{value:g}")
    return value


def cmd_restore(
    bl: Backlight, device: BrightnessDevice, state_dir: Path | None
) -> BrightnessDevice:
    saved = restore_state(state_dir)
    updated = device.with_current(saved)
    if updated.current != saved:
        log.warning(
            "saved brightness %d outside 0..%d, using %d", saved, device.maximum, updated.current
        )

    try:
        bl.write(updated)
    except IOFailure as e:
        raise IOFailure(f"failed to restore last brightness: {e}") from e
    return updated


def run(args: argparse.Namespace) -> None:
    cfg = _settings(args.config)
    state_dir = _resolve_state_dir(cfg)
    log.debug("backlight_dir=%s state_dir=%s", cfg["backlight_dir"], state_dir)

    bl, device = backlight.load(cfg["backlight_dir"])

    if args.cmd == "set":
        cmd_set(bl, device, args.expr, state_dir)
    elif args.cmd == "get":
        cmd_get(device)
    elif args.cmd == "restore":
        cmd_restore(bl, device, state_dir)


def main(argv: list[str] | None = None) -> None:
    raw = sys.argv[1:] if argv is None else argv
    args = _build_parser().parse_args(_mark_expression(raw))
    setup_logging(args.verbose)

    try:
        run(args)
    except (BrightnessError, ConfigError) as e:
        raise SystemExit(f"error: {e}") from e
