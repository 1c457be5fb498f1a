"""Logging setup: standard ``logging`` rendered through Rich.

Library modules only call ``logging.getLogger(__name__)``; an application
embedding pluginkit calls ``setup_logging`` once at startup.
"""

from __future__ import annotations

import logging

LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def setup_logging(level: str = "warning") -> None:
    """Attach a RichHandler to the root logger at *level* (name, case-insensitive)."""
    from rich.logging import RichHandler

    log_level = LEVELS.get(level.lower(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(log_level)

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(
            rich_tracebacks=(log_level == logging.DEBUG),
            show_path=False,
            show_time=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    for handler in root.handlers:
        handler.setLevel(log_level)
