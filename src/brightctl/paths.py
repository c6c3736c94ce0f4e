from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

APP_NAME = "brightctl"


def default_state_dir(env: Mapping[str, str] | None = None) -> Path | None:
    """Return the root under which brightctl keeps its state.

    Uses XDG_STATE_HOME when available, else ~/.local/state. Returns None when
    neither can be determined; persistence is then skipped instead of failing.
    """

    env = os.environ if env is None else env
    base = env.get("XDG_STATE_HOME")
    if base:
        return Path(base)
    try:
        return Path.home() / ".local" / "state"
    except RuntimeError:
        return None
