"""Logging configuration for the service.

``setup_logging`` attaches a console handler to the root logger the first
time it is called. Later calls, for example from repeated ``create_app``
invocations in tests, leave the existing handlers untouched.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Args:
        level: Logging level name (e.g. ``"DEBUG"``). Case insensitive; an
            unknown name falls back to ``INFO``.
    """

    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
