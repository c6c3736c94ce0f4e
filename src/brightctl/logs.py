from __future__ import annotations

import logging
import sys


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send brightctl log records to stderr.

    Warnings are always shown; -v adds debug output.
    """

    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("brightctl")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
