from __future__ import annotations

import os
from pathlib import Path

from brightctl.errors import CorruptValue, IOFailure


def read_int(path: str | Path) -> int:
    """Read a non-negative decimal integer from a sysfs-style text file.

    Surrounding whitespace (the kernel appends a newline) is ignored.
    FileNotFoundError is left to the caller, other OS errors become IOFailure.
    """

    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"failed to read file {p}: {e}") from e

    text = raw.strip()
    if not text.isascii() or not text.isdigit():
        raise CorruptValue(f"expected number from {p}, but got {text}")
    return int(text)


def write_int(path: str | Path, value: int, create: bool = True) -> None:
    """Replace the whole file content with the decimal text of value.

    With create=False the file must already exist (sysfs attributes are never
    created by userspace).
    """

    p = Path(path)
    flags = os.O_WRONLY | os.O_TRUNC
    if create:
        flags |= os.O_CREAT
    try:
        fd = os.open(p, flags, 0o644)
    except OSError as e:
        raise IOFailure(f"failed to open {p}: {e}") from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(str(int(value)))
    except OSError as e:
        raise IOFailure(f"failed to write {p}: {e}") from e
