"""Logging setup for the server process.

stdout carries protocol traffic, so every log record goes to stderr.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger at *level*.

    Raises:
        ValueError: *level* is not a known logging level name.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(numeric)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))
