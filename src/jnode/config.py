"""Runtime options and logging setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from textual.logging import TextualHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class EditorConfig:
    indent: int = 2
    strict: bool = False
    keep_nested: bool = True
    log_level: str = "WARNING"
    log_file: str = ""


def setup_logging(level: str = "WARNING", log_file: str = "") -> None:
    """Send log records to a file, or to the Textual devtools console."""
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("jnode")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
